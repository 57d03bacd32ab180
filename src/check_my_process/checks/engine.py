"""Check engine: run every rule over one context and aggregate the results."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from check_my_process.checks.models import (
    STATUS_FAILED,
    STATUS_PASSED,
    STATUS_SKIPPED,
    CheckContext,
    CheckResult,
    CheckSummary,
)
from check_my_process.checks.rules import (
    check_branch_pattern,
    check_max_files,
    check_max_lines,
    check_min_approvals,
    check_ticket_reference,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

# Registration order is the report order.
CHECKS: tuple[Callable[[CheckContext], CheckResult], ...] = (
    check_max_files,
    check_max_lines,
    check_min_approvals,
    check_branch_pattern,
    check_ticket_reference,
)

_CATEGORY_DISPLAY_NAMES: dict[str, str] = {
    "pr": "Pull Request",
    "branch": "Branch",
    "ticket": "Ticket",
}


def run_checks(context: CheckContext) -> CheckSummary:
    """Run every registered rule once, in order, and summarise the results.

    ``has_errors`` is set only by failed results with ``error`` severity;
    failed warnings are counted but do not set it.
    """
    results = tuple(check(context) for check in CHECKS)

    for result in results:
        logger.debug("%s: %s (%s) %s", result.rule, result.status, result.severity, result.message)

    return CheckSummary(
        results=results,
        passed=sum(1 for r in results if r.status == STATUS_PASSED),
        failed=sum(1 for r in results if r.status == STATUS_FAILED),
        skipped=sum(1 for r in results if r.status == STATUS_SKIPPED),
        has_errors=any(r.status == STATUS_FAILED and r.severity == "error" for r in results),
    )


def category_display_name(category: str) -> str:
    """Human-readable name of a rule category; unknown categories pass through."""
    return _CATEGORY_DISPLAY_NAMES.get(category, category)


def group_results_by_category(results: Iterable[CheckResult]) -> dict[str, list[CheckResult]]:
    """Group *results* under the display name of their category.

    Categories appear in first-seen order and results keep their original
    order within a category.
    """
    groups: dict[str, list[CheckResult]] = {}
    for result in results:
        groups.setdefault(category_display_name(result.category), []).append(result)
    return groups
