"""Shared test fixtures for check-my-process."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

import httpx
import pytest

from check_my_process.github.models import PullRequestSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


_BASE_SNAPSHOT = PullRequestSnapshot(
    number=42,
    title="ABC-123: Add login form",
    body="Implements the login form.",
    branch="feature/ABC-123-login-form",
    base_branch="main",
    author="octocat",
    files_changed=5,
    additions=100,
    deletions=50,
    approval_count=2,
    reviewers=("alice", "bob"),
)


@pytest.fixture()
def make_snapshot() -> Callable[..., PullRequestSnapshot]:
    """Build a well-behaved snapshot, overriding any field by keyword."""

    def _make(**overrides: Any) -> PullRequestSnapshot:
        return replace(_BASE_SNAPSHOT, **overrides)

    return _make


@pytest.fixture()
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty project directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def pr_payload() -> dict[str, Any]:
    """A ``GET /repos/{owner}/{repo}/pulls/{n}`` response body."""
    return {
        "number": 123,
        "title": "Test PR",
        "body": "PR body",
        "head": {"ref": "feature/test"},
        "base": {"ref": "main"},
        "user": {"login": "testuser"},
        "changed_files": 5,
        "additions": 100,
        "deletions": 50,
    }


class FakeGitHub:
    """Route table behind an :class:`httpx.MockTransport` standing in for the GitHub API.

    Routes are keyed by URL path; unrouted paths answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[], httpx.Response] | Exception] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def add(
        self,
        path: str,
        payload: Any = None,
        *,
        status: int = 200,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.routes[path] = lambda: httpx.Response(status, json=payload, headers=headers)

    def add_text(self, path: str, text: str, *, status: int = 200) -> None:
        self.routes[path] = lambda: httpx.Response(status, text=text)

    def fail(self, path: str, error: Exception) -> None:
        self.routes[path] = error

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(route, Exception):
            raise route
        return route()


@pytest.fixture()
def fake_github() -> FakeGitHub:
    return FakeGitHub()
