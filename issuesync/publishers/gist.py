"""Update pre-created Gists with formatted issue content."""

import logging
from typing import Any, Dict

from issuesync.adapters.github import GitHubAdapter
from issuesync.errors import RequestError

LOG = logging.getLogger("issuesync.publishers.gist")


class GistPublisher:
    """Replaces one file slot and the description of a Gist. Last write wins."""

    def __init__(self, adapter: GitHubAdapter, filename: str = "content.md") -> None:
        self._adapter = adapter
        self._filename = filename

    def publish(self, gist_id: str, content: str, title: str) -> Dict[str, Any] | None:
        """Update the Gist; return its metadata, or None when the update failed."""
        LOG.info("Updating Gist %s with new content...", gist_id)
        try:
            data = self._adapter.update_gist(
                gist_id,
                {self._filename: {"content": content}},
                description=title,
            )
        except RequestError as e:
            LOG.error("Error updating Gist %s: %s", gist_id, e)
            if e.status_code is not None:
                LOG.error("Status: %s", e.status_code)
            if e.response_body:
                LOG.error("Response data: %s", e.response_body)
            return None
        LOG.info("Gist %s updated successfully.", gist_id)
        return data
