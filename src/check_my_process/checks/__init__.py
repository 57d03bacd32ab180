"""Checks domain: rule functions, result types, and the check engine."""

from check_my_process.checks.engine import (
    CHECKS,
    category_display_name,
    group_results_by_category,
    run_checks,
)
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

__all__ = [
    "CHECKS",
    "STATUS_FAILED",
    "STATUS_PASSED",
    "STATUS_SKIPPED",
    "CheckContext",
    "CheckResult",
    "CheckSummary",
    "category_display_name",
    "check_branch_pattern",
    "check_max_files",
    "check_max_lines",
    "check_min_approvals",
    "check_ticket_reference",
    "group_results_by_category",
    "run_checks",
]
