"""Exceptions raised while fetching and publishing issues."""


class IssueSyncError(Exception):
    """Base class for issuesync errors."""

    pass


class MissingCredentialError(IssueSyncError):
    """Raised when a required token is not configured."""

    pass


class RequestError(IssueSyncError):
    """Raised when a GitHub API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class UpstreamQueryError(RequestError):
    """Raised when a GraphQL response carries a top-level errors list."""

    pass

