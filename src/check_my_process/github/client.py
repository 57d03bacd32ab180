"""GitHub REST client that builds a :class:`PullRequestSnapshot`.

Pull request metadata and the review list are fetched concurrently and joined
before the snapshot is constructed.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import TYPE_CHECKING, Any

import httpx

from check_my_process import __version__
from check_my_process.github.errors import (
    GitHubAPIError,
    GitHubAuthError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from check_my_process.github.models import PullRequestSnapshot

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
REVIEWS_PER_PAGE = 100


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------


def _latest_review_states(reviews: list[dict[str, Any]]) -> dict[str, str]:
    """Map each reviewer login to the state of their most recent review.

    Reviews without a user or a state are ignored.  Logins keep the position
    of their first review.
    """
    latest: dict[str, str] = {}
    for review in reviews:
        user = review.get("user") or {}
        login = user.get("login")
        state = review.get("state")
        if login and state:
            latest[login] = state
    return latest


def snapshot_from_payload(
    pr: dict[str, Any], reviews: list[dict[str, Any]]
) -> PullRequestSnapshot:
    """Build a snapshot from the ``pulls`` and ``pulls/reviews`` JSON payloads."""
    latest = _latest_review_states(reviews)
    approval_count = sum(1 for state in latest.values() if state == "APPROVED")
    user = pr.get("user") or {}

    return PullRequestSnapshot(
        number=pr["number"],
        title=pr["title"],
        body=pr.get("body"),
        branch=pr["head"]["ref"],
        base_branch=pr["base"]["ref"],
        author=user.get("login") or "unknown",
        files_changed=pr["changed_files"],
        additions=pr["additions"],
        deletions=pr["deletions"],
        approval_count=approval_count,
        reviewers=tuple(latest),
    )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class GitHubClient:
    """Minimal read-only GitHub API client.

    *transport* is handed to :class:`httpx.Client`; tests pass an
    :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        token: str,
        base_url: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self._http = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": f"check-my-process/{__version__}",
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _raise_for_status(self, response: httpx.Response, resource: str) -> None:
        if response.is_success:
            return

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        message = payload.get("message") if isinstance(payload, dict) else None
        message = message or response.reason_phrase or "Unknown error"
        status = response.status_code

        logger.warning("GitHub request for %s failed: %s %s", resource, status, message)

        if status == 401:
            raise GitHubAuthError()
        if status == 404:
            raise GitHubNotFoundError(resource)
        if status in (403, 429) and (
            response.headers.get("X-RateLimit-Remaining") == "0"
            or "rate limit" in message.lower()
        ):
            reset = response.headers.get("X-RateLimit-Reset")
            reset_ts = int(reset) if reset and reset.isdigit() else int(time.time())
            raise GitHubRateLimitError(datetime.fromtimestamp(reset_ts), status_code=status)
        raise GitHubAPIError(f"GitHub API error: {status} - {message}", status_code=status)

    def _get(self, path: str, resource: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("GET %s", url)
        try:
            response = self._http.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("GitHub request for %s failed: %s", resource, exc)
            raise GitHubAPIError(f"Request to GitHub failed: {exc}") from exc
        self._raise_for_status(response, resource)
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("GitHub returned a non-JSON body for %s", resource)
            raise GitHubAPIError(
                f"Invalid JSON from GitHub for {resource}", status_code=response.status_code
            ) from exc

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestSnapshot:
        """Fetch pull request *number* of ``owner/repo`` with its reviews.

        Raises
        ------
        GitHubAPIError
            (or a subclass) when either request fails.
        """
        path = f"repos/{owner}/{repo}/pulls/{number}"
        resource = f"Pull request {owner}/{repo}#{number}"

        with ThreadPoolExecutor(max_workers=2) as pool:
            pr_future = pool.submit(self._get, path, resource)
            reviews_future = pool.submit(
                self._get,
                f"{path}/reviews",
                f"Reviews of {owner}/{repo}#{number}",
                {"per_page": REVIEWS_PER_PAGE},
            )
            pr_data = pr_future.result()
            reviews_data = reviews_future.result()

        try:
            snapshot = snapshot_from_payload(pr_data, reviews_data)
        except (KeyError, TypeError, AttributeError) as exc:
            raise GitHubAPIError(f"Unexpected GitHub response for {resource}: {exc!r}") from exc

        logger.debug(
            "Fetched %s: %d files, +%d/-%d, %d approval(s)",
            resource,
            snapshot.files_changed,
            snapshot.additions,
            snapshot.deletions,
            snapshot.approval_count,
        )
        return snapshot


def create_github_client(token: str, base_url: str | None = None) -> GitHubClient:
    """Create a :class:`GitHubClient` for *token* and optional enterprise *base_url*."""
    return GitHubClient(token, base_url)
