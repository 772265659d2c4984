"""GitHub API adapter (GraphQL queries and Gist updates)."""

import logging
from typing import Any, Dict

import requests

from issuesync.errors import RequestError, UpstreamQueryError

LOG = logging.getLogger("issuesync.adapters.github")


class GitHubAdapter:
    """Thin GitHub API client over a requests session."""

    def __init__(self, token: str, api_url: str = "https://api.github.com", timeout: int = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"bearer {token}"
        self._session.headers["Accept"] = "application/json"

    def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            raise RequestError(f"{method} {path} failed: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except ValueError:
                pass
            raise RequestError(
                f"{resp.status_code}: {msg}",
                status_code=resp.status_code,
                response_body=resp.text,
            )
        return resp

    def graphql(self, query: str, variables: Dict[str, Any] | None = None) -> Dict[str, Any] | None:
        """Run a GraphQL query and return its ``data`` member.

        Raises:
            RequestError: transport failure or HTTP error status.
            UpstreamQueryError: the payload has a top-level ``errors`` list.
        """
        resp = self._request("POST", "/graphql", json={"query": query, "variables": variables or {}})
        try:
            payload = resp.json()
        except ValueError as e:
            raise RequestError(f"GraphQL response is not JSON: {e}", status_code=resp.status_code) from e
        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            LOG.debug("GraphQL errors: %s", errors)
            messages = ", ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
            raise UpstreamQueryError(f"GraphQL request failed: {messages}", status_code=resp.status_code)
        return payload.get("data") if isinstance(payload, dict) else None

    def update_gist(self, gist_id: str, files: Dict[str, Any], description: str | None = None) -> Dict[str, Any]:
        """Partially update a Gist: description and the given file slots."""
        body: Dict[str, Any] = {"files": files}
        if description is not None:
            body["description"] = description
        resp = self._request("PATCH", f"/gists/{gist_id}", json=body)
        return resp.json()
