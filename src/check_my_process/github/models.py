"""Read-only pull request data consumed by the check engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequestSnapshot:
    """One pull request as seen at the moment it was fetched."""

    number: int
    title: str
    body: str | None
    branch: str  # source (head) branch
    base_branch: str  # target branch
    author: str
    files_changed: int
    additions: int
    deletions: int
    approval_count: int
    reviewers: tuple[str, ...] = ()
