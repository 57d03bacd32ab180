"""Tests for the five rule functions in checks/rules.py."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from check_my_process.checks.models import CheckContext
from check_my_process.checks.rules import (
    check_branch_pattern,
    check_max_files,
    check_max_lines,
    check_min_approvals,
    check_ticket_reference,
)
from check_my_process.config.schema import (
    BranchConfig,
    Config,
    PrConfig,
    SettingsConfig,
    TicketConfig,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from check_my_process.github.models import PullRequestSnapshot


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _ctx(snapshot: PullRequestSnapshot, **sections: object) -> CheckContext:
    settings = sections.pop("settings", SettingsConfig())
    return CheckContext(snapshot=snapshot, config=Config(settings=settings, **sections))  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# pr.max_files
# ---------------------------------------------------------------------------


class TestMaxFiles:
    """Tests for check_max_files()."""

    def test_passes_under_limit(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_max_files(_ctx(make_snapshot(files_changed=5), pr=PrConfig(max_files=20)))
        assert result.rule == "pr.max_files"
        assert result.status == "passed"
        assert result.message == "5 files (max: 20)"
        assert result.expected == 20
        assert result.actual == 5

    def test_limit_itself_passes(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_max_files(_ctx(make_snapshot(files_changed=20), pr=PrConfig(max_files=20)))
        assert result.status == "passed"

    def test_fails_over_limit(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_max_files(_ctx(make_snapshot(files_changed=25), pr=PrConfig(max_files=20)))
        assert result.status == "failed"
        assert result.message == "25 files exceeds limit of 20"
        assert result.expected == 20
        assert result.actual == 25

    def test_zero_limit_fails_any_change(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_max_files(_ctx(make_snapshot(files_changed=1), pr=PrConfig(max_files=0)))
        assert result.status == "failed"

    def test_skipped_without_limit(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_max_files(_ctx(make_snapshot(), pr=PrConfig(max_lines=100)))
        assert result.status == "skipped"
        assert result.message == "max_files not configured"
        assert result.expected is None
        assert result.actual is None

    def test_skipped_without_section(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_max_files(_ctx(make_snapshot()))
        assert result.status == "skipped"
        assert result.severity == "error"


# ---------------------------------------------------------------------------
# pr.max_lines
# ---------------------------------------------------------------------------


class TestMaxLines:
    """Tests for check_max_lines()."""

    def test_counts_additions_and_deletions(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        snapshot = make_snapshot(additions=100, deletions=50)
        result = check_max_lines(_ctx(snapshot, pr=PrConfig(max_lines=400)))
        assert result.status == "passed"
        assert result.message == "150 lines (max: 400)"
        assert result.actual == 150

    def test_deletions_only(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        snapshot = make_snapshot(additions=0, deletions=401)
        result = check_max_lines(_ctx(snapshot, pr=PrConfig(max_lines=400)))
        assert result.status == "failed"
        assert result.message == "401 lines exceeds limit of 400"
        assert result.actual == 401

    def test_limit_itself_passes(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        snapshot = make_snapshot(additions=400, deletions=0)
        result = check_max_lines(_ctx(snapshot, pr=PrConfig(max_lines=400)))
        assert result.status == "passed"

    def test_skipped_without_limit(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_max_lines(_ctx(make_snapshot(), pr=PrConfig()))
        assert result.status == "skipped"
        assert result.message == "max_lines not configured"


# ---------------------------------------------------------------------------
# pr.min_approvals
# ---------------------------------------------------------------------------


class TestMinApprovals:
    """Tests for check_min_approvals()."""

    def test_passes_at_minimum(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_min_approvals(
            _ctx(make_snapshot(approval_count=1), pr=PrConfig(min_approvals=1))
        )
        assert result.status == "passed"
        assert result.message == "1 approvals (min: 1)"
        assert result.expected == 1
        assert result.actual == 1

    def test_fails_below_minimum(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_min_approvals(
            _ctx(make_snapshot(approval_count=0), pr=PrConfig(min_approvals=2))
        )
        assert result.status == "failed"
        assert result.message == "0 approvals, need 2"

    def test_zero_minimum_always_passes(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_min_approvals(
            _ctx(make_snapshot(approval_count=0), pr=PrConfig(min_approvals=0))
        )
        assert result.status == "passed"

    def test_skipped_without_minimum(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_min_approvals(_ctx(make_snapshot(), pr=PrConfig(max_files=1)))
        assert result.status == "skipped"
        assert result.message == "min_approvals not configured"


# ---------------------------------------------------------------------------
# branch.pattern
# ---------------------------------------------------------------------------


class TestBranchPattern:
    """Tests for check_branch_pattern()."""

    def test_matching_branch(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_branch_pattern(
            _ctx(make_snapshot(branch="feature/x"), branch=BranchConfig(pattern="^feature/"))
        )
        assert result.status == "passed"
        assert result.message == 'Branch "feature/x" matches pattern'
        assert result.expected == "^feature/"
        assert result.actual == "feature/x"

    def test_non_matching_branch(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_branch_pattern(
            _ctx(make_snapshot(branch="bad-branch"), branch=BranchConfig(pattern="^feature/"))
        )
        assert result.status == "failed"
        assert result.message == 'Branch "bad-branch" doesn\'t match pattern'
        assert result.actual == "bad-branch"

    def test_unanchored_pattern_matches_anywhere(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_branch_pattern(
            _ctx(make_snapshot(branch="user/feature/x"), branch=BranchConfig(pattern="feature"))
        )
        assert result.status == "passed"

    @pytest.mark.parametrize("branch", ["feature/ABC-1-x", "anything"])
    def test_invalid_regex_always_fails(
        self, make_snapshot: Callable[..., PullRequestSnapshot], branch: str
    ) -> None:
        result = check_branch_pattern(
            _ctx(make_snapshot(branch=branch), branch=BranchConfig(pattern="[unclosed"))
        )
        assert result.status == "failed"
        assert result.message == "Invalid branch pattern regex: [unclosed"
        assert result.expected == "[unclosed"
        assert result.actual == branch

    def test_invalid_regex_uses_rule_severity(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_branch_pattern(
            _ctx(make_snapshot(), branch=BranchConfig(pattern="(", severity="warning"))
        )
        assert result.status == "failed"
        assert result.severity == "warning"

    def test_skipped_without_pattern(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_branch_pattern(_ctx(make_snapshot(), branch=BranchConfig()))
        assert result.status == "skipped"
        assert result.message == "branch pattern not configured"
        assert result.expected is None
        assert result.actual is None


# ---------------------------------------------------------------------------
# ticket.pattern
# ---------------------------------------------------------------------------


class TestTicketReference:
    """Tests for check_ticket_reference()."""

    def test_found_in_all_default_fields(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        snapshot = make_snapshot(
            title="ABC-1 title", branch="feature/ABC-1-x", body="Fixes ABC-1"
        )
        result = check_ticket_reference(_ctx(snapshot, ticket=TicketConfig(pattern="[A-Z]+-[0-9]+")))
        assert result.status == "passed"
        assert result.message == "Ticket found in: title, branch, body"
        assert result.expected == "[A-Z]+-[0-9]+"
        assert result.actual is None

    def test_reports_only_matching_fields_in_check_in_order(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        snapshot = make_snapshot(title="ABC-1 title", branch="main", body="see ABC-1")
        ticket = TicketConfig(pattern="ABC-[0-9]+", check_in=("body", "branch", "title"))
        result = check_ticket_reference(_ctx(snapshot, ticket=ticket))
        assert result.status == "passed"
        assert result.message == "Ticket found in: body, title"

    def test_not_found_lists_all_check_in_fields(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        snapshot = make_snapshot(title="No ticket", branch="bad-branch", body="nothing")
        ticket = TicketConfig(pattern="[A-Z]+-[0-9]+", check_in=("title", "body"))
        result = check_ticket_reference(_ctx(snapshot, ticket=ticket))
        assert result.status == "failed"
        assert result.message == "No ticket reference found in: title, body"
        assert result.expected == "[A-Z]+-[0-9]+"
        assert result.actual is None

    def test_empty_check_in_searches_nothing(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        snapshot = make_snapshot(title="X-1", branch="feature/X-1-x", body="X-1")
        ticket = TicketConfig(pattern="X", check_in=())
        result = check_ticket_reference(_ctx(snapshot, ticket=ticket))
        assert result.status == "failed"
        assert result.message == "No ticket reference found in: "
        assert result.expected == "X"

    def test_only_searches_configured_fields(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        snapshot = make_snapshot(title="No ticket", body="ABC-9")
        ticket = TicketConfig(pattern="ABC-[0-9]+", check_in=("title",))
        result = check_ticket_reference(_ctx(snapshot, ticket=ticket))
        assert result.status == "failed"
        assert result.message == "No ticket reference found in: title"

    def test_null_body_does_not_match(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        snapshot = make_snapshot(title="No ticket", branch="main", body=None)
        result = check_ticket_reference(_ctx(snapshot, ticket=TicketConfig(pattern=".*")))
        # ".*" matches the title and branch; the null body is simply skipped.
        assert result.status == "passed"
        assert result.message == "Ticket found in: title, branch"

    def test_null_body_alone_fails(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        snapshot = make_snapshot(body=None)
        ticket = TicketConfig(pattern="ABC", check_in=("body",))
        result = check_ticket_reference(_ctx(snapshot, ticket=ticket))
        assert result.status == "failed"

    def test_invalid_regex_fails(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_ticket_reference(_ctx(make_snapshot(), ticket=TicketConfig(pattern="*bad")))
        assert result.status == "failed"
        assert result.message == "Invalid ticket pattern regex: *bad"
        assert result.expected == "*bad"
        assert result.actual is None

    def test_skipped_without_pattern(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_ticket_reference(_ctx(make_snapshot()))
        assert result.status == "skipped"
        assert result.message == "ticket pattern not configured"


# ---------------------------------------------------------------------------
# Severity resolution
# ---------------------------------------------------------------------------


class TestSeverity:
    """Severity comes from the section override, else settings.default_severity."""

    def test_default_severity_applies(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        result = check_max_files(
            _ctx(
                make_snapshot(files_changed=30),
                settings=SettingsConfig(default_severity="warning"),
                pr=PrConfig(max_files=20),
            )
        )
        assert result.severity == "warning"

    def test_section_override_wins(self, make_snapshot: Callable[..., PullRequestSnapshot]) -> None:
        result = check_max_lines(
            _ctx(
                make_snapshot(),
                settings=SettingsConfig(default_severity="warning"),
                pr=PrConfig(max_lines=10, severity="error"),
            )
        )
        assert result.severity == "error"

    def test_skipped_results_still_carry_severity(
        self, make_snapshot: Callable[..., PullRequestSnapshot]
    ) -> None:
        ctx = _ctx(
            make_snapshot(),
            settings=SettingsConfig(default_severity="warning"),
            ticket=TicketConfig(severity="error"),
        )
        assert check_ticket_reference(ctx).severity == "error"
        assert check_branch_pattern(ctx).severity == "warning"
        assert check_min_approvals(ctx).severity == "warning"
