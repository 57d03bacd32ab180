"""Rule functions: each inspects one :class:`CheckContext` and returns one verdict.

All rules share the same contract:

* severity is the section's ``severity`` or, failing that,
  ``settings.default_severity``; it is attached even to skipped results;
* a rule whose trigger key is unset is ``skipped``;
* an invalid regular expression yields a ``failed`` result, never an
  exception.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from check_my_process.checks.models import (
    STATUS_FAILED,
    STATUS_PASSED,
    STATUS_SKIPPED,
    CheckContext,
    CheckResult,
)
from check_my_process.config.schema import TICKET_LOCATIONS

if TYPE_CHECKING:
    from check_my_process.config.schema import Config


def _severity(config: Config, section: str) -> str:
    options = getattr(config, section)
    if options is not None and options.severity is not None:
        return options.severity
    return config.settings.default_severity


def _compile(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except re.error:
        return None


# ---------------------------------------------------------------------------
# Pull request size and reviews
# ---------------------------------------------------------------------------


def check_max_files(context: CheckContext) -> CheckResult:
    """``pr.max_files``: changed file count must not exceed the limit."""
    pr = context.config.pr
    limit = pr.max_files if pr is not None else None
    severity = _severity(context.config, "pr")

    if limit is None:
        return CheckResult("pr.max_files", STATUS_SKIPPED, "max_files not configured", severity)

    actual = context.snapshot.files_changed
    if actual <= limit:
        return CheckResult(
            "pr.max_files", STATUS_PASSED, f"{actual} files (max: {limit})", severity,
            expected=limit, actual=actual,
        )
    return CheckResult(
        "pr.max_files", STATUS_FAILED, f"{actual} files exceeds limit of {limit}", severity,
        expected=limit, actual=actual,
    )


def check_max_lines(context: CheckContext) -> CheckResult:
    """``pr.max_lines``: additions plus deletions must not exceed the limit."""
    pr = context.config.pr
    limit = pr.max_lines if pr is not None else None
    severity = _severity(context.config, "pr")

    if limit is None:
        return CheckResult("pr.max_lines", STATUS_SKIPPED, "max_lines not configured", severity)

    actual = context.snapshot.additions + context.snapshot.deletions
    if actual <= limit:
        return CheckResult(
            "pr.max_lines", STATUS_PASSED, f"{actual} lines (max: {limit})", severity,
            expected=limit, actual=actual,
        )
    return CheckResult(
        "pr.max_lines", STATUS_FAILED, f"{actual} lines exceeds limit of {limit}", severity,
        expected=limit, actual=actual,
    )


def check_min_approvals(context: CheckContext) -> CheckResult:
    """``pr.min_approvals``: at least this many reviewers must have approved."""
    pr = context.config.pr
    minimum = pr.min_approvals if pr is not None else None
    severity = _severity(context.config, "pr")

    if minimum is None:
        return CheckResult(
            "pr.min_approvals", STATUS_SKIPPED, "min_approvals not configured", severity
        )

    actual = context.snapshot.approval_count
    if actual >= minimum:
        return CheckResult(
            "pr.min_approvals", STATUS_PASSED, f"{actual} approvals (min: {minimum})", severity,
            expected=minimum, actual=actual,
        )
    return CheckResult(
        "pr.min_approvals", STATUS_FAILED, f"{actual} approvals, need {minimum}", severity,
        expected=minimum, actual=actual,
    )


# ---------------------------------------------------------------------------
# Naming and ticket references
# ---------------------------------------------------------------------------


def check_branch_pattern(context: CheckContext) -> CheckResult:
    """``branch.pattern``: the source branch name must match the pattern.

    The pattern is searched, not anchored; anchors in the pattern apply.
    """
    branch_config = context.config.branch
    pattern = branch_config.pattern if branch_config is not None else None
    severity = _severity(context.config, "branch")

    if not pattern:
        return CheckResult(
            "branch.pattern", STATUS_SKIPPED, "branch pattern not configured", severity
        )

    branch = context.snapshot.branch
    regex = _compile(pattern)
    if regex is None:
        return CheckResult(
            "branch.pattern", STATUS_FAILED, f"Invalid branch pattern regex: {pattern}", severity,
            expected=pattern, actual=branch,
        )

    if regex.search(branch):
        return CheckResult(
            "branch.pattern", STATUS_PASSED, f'Branch "{branch}" matches pattern', severity,
            expected=pattern, actual=branch,
        )
    return CheckResult(
        "branch.pattern", STATUS_FAILED, f'Branch "{branch}" doesn\'t match pattern', severity,
        expected=pattern, actual=branch,
    )


def check_ticket_reference(context: CheckContext) -> CheckResult:
    """``ticket.pattern``: a ticket id must appear in at least one ``check_in`` field.

    Fields are reported in ``check_in`` order.  A missing field (such as an
    empty pull request body) never matches.  ``actual`` is never set since
    the search spans several fields.
    """
    ticket = context.config.ticket
    pattern = ticket.pattern if ticket is not None else None
    severity = _severity(context.config, "ticket")

    if not pattern:
        return CheckResult(
            "ticket.pattern", STATUS_SKIPPED, "ticket pattern not configured", severity
        )

    regex = _compile(pattern)
    if regex is None:
        return CheckResult(
            "ticket.pattern", STATUS_FAILED, f"Invalid ticket pattern regex: {pattern}", severity,
            expected=pattern,
        )

    check_in = (
        ticket.check_in if ticket is not None and ticket.check_in is not None else TICKET_LOCATIONS
    )
    snapshot = context.snapshot
    locations: dict[str, str | None] = {
        "title": snapshot.title,
        "branch": snapshot.branch,
        "body": snapshot.body,
    }

    found_in: list[str] = []
    for location in check_in:
        text = locations.get(location)
        if text and regex.search(text):
            found_in.append(location)

    if found_in:
        return CheckResult(
            "ticket.pattern", STATUS_PASSED, f"Ticket found in: {', '.join(found_in)}", severity,
            expected=pattern,
        )
    return CheckResult(
        "ticket.pattern", STATUS_FAILED,
        f"No ticket reference found in: {', '.join(check_in)}", severity,
        expected=pattern,
    )
