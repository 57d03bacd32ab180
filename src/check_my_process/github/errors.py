"""GitHub API error hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class GitHubAPIError(Exception):
    """A GitHub request failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubAuthError(GitHubAPIError):
    """The token was rejected (HTTP 401)."""

    def __init__(self, message: str = "GitHub authentication failed") -> None:
        super().__init__(message, status_code=401)


class GitHubNotFoundError(GitHubAPIError):
    """The requested resource does not exist or is not visible (HTTP 404)."""

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found", status_code=404)
        self.resource = resource


class GitHubRateLimitError(GitHubAPIError):
    """The API rate limit is exhausted until *reset_at*."""

    def __init__(self, reset_at: datetime, status_code: int = 403) -> None:
        super().__init__(
            f"GitHub API rate limit exceeded. Resets at {reset_at:%H:%M:%S}",
            status_code=status_code,
        )
        self.reset_at = reset_at
