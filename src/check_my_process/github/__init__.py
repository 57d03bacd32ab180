"""GitHub domain: REST client, error types, pull request snapshot."""

from check_my_process.github.client import (
    GitHubClient,
    create_github_client,
    snapshot_from_payload,
)
from check_my_process.github.errors import (
    GitHubAPIError,
    GitHubAuthError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from check_my_process.github.models import PullRequestSnapshot

__all__ = [
    "GitHubAPIError",
    "GitHubAuthError",
    "GitHubClient",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "PullRequestSnapshot",
    "create_github_client",
    "snapshot_from_payload",
]
