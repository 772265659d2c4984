"""Fetch the newest open issues of a repository via GitHub GraphQL."""

import logging
from datetime import datetime
from typing import Any, Dict, List

from issuesync.adapters.github import GitHubAdapter
from issuesync.models import Issue

LOG = logging.getLogger("issuesync.fetcher")

ISSUES_QUERY = """
query getIssues($owner: String!, $repo: String!, $count: Int!) {
  repository(owner: $owner, name: $repo) {
    issues(first: $count, orderBy: {field: CREATED_AT, direction: DESC},
      filterBy: {createdBy: $owner, states: OPEN}) {
      nodes {
        title
        body
        createdAt
        url
        labels(first: 10) {
          nodes {
            name
          }
        }
      }
    }
  }
}
"""


def _parse_iso(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _issue_from_node(node: Dict[str, Any]) -> Issue:
    label_nodes = (node.get("labels") or {}).get("nodes") or []
    labels = [lb["name"] for lb in label_nodes if isinstance(lb, dict) and "name" in lb]
    return Issue(
        title=node.get("title") or "",
        body=node.get("body") or "",
        created_at=_parse_iso(node["createdAt"]),
        url=node.get("url") or "",
        labels=labels,
    )


def _issue_nodes(data: Dict[str, Any] | None) -> List[Dict[str, Any]] | None:
    """Return repository.issues.nodes, or None when any level is missing."""
    repository = (data or {}).get("repository")
    if not isinstance(repository, dict):
        return None
    issues = repository.get("issues")
    if not isinstance(issues, dict):
        return None
    nodes = issues.get("nodes")
    if not isinstance(nodes, list):
        return None
    return nodes


def fetch_latest_issues(adapter: GitHubAdapter, owner: str, repo: str, count: int = 6) -> List[Issue]:
    """Fetch the ``count`` newest open issues created by ``owner`` in owner/repo.

    Issues come back newest first, as ordered by the API. A response without
    ``repository.issues.nodes`` yields an empty list; GraphQL and transport
    errors propagate (RequestError / UpstreamQueryError).
    """
    LOG.info("Fetching latest %s issues from %s/%s...", count, owner, repo)
    data = adapter.graphql(ISSUES_QUERY, {"owner": owner, "repo": repo, "count": count})

    nodes = _issue_nodes(data)
    if nodes is None:
        LOG.error("Failed to retrieve issues data from %s/%s", owner, repo)
        return []

    LOG.info("Found %s issues.", len(nodes))
    return [_issue_from_node(node) for node in nodes if isinstance(node, dict)]
