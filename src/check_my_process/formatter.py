"""Report formatters: Rich terminal text and structured JSON."""

from __future__ import annotations

import json
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

from check_my_process.checks.engine import group_results_by_category
from check_my_process.checks.models import STATUS_FAILED, STATUS_PASSED, STATUS_SKIPPED

if TYPE_CHECKING:
    from check_my_process.checks.models import CheckResult, CheckSummary

_STATUS_ICONS: dict[str, tuple[str, str]] = {
    STATUS_PASSED: ("✓", "green"),
    STATUS_FAILED: ("✗", "red"),
    STATUS_SKIPPED: ("○", "dim"),
}

_SEPARATOR_WIDTH = 50


def _result_line(result: CheckResult) -> Text:
    icon, style = _STATUS_ICONS.get(result.status, ("?", "white"))
    line = Text("  ")
    line.append(icon, style=style)
    line.append(f" {result.name}: {result.message}")
    if result.status == STATUS_FAILED and result.severity == "warning":
        line.append(" (warning)", style="yellow")
    if result.status == STATUS_FAILED and result.expected is not None:
        line.append("\n    ")
        line.append("Expected:", style="dim")
        line.append(f" {result.expected}")
    return line


def format_text(
    summary: CheckSummary,
    *,
    version: str,
    repo: str,
    pr_number: int,
    color: bool = False,
) -> str:
    """Format a CheckSummary as human-readable text grouped by category.

    Example output::

        check-my-process v1.1.0

        Checking PR #42 in acme/api...

        Pull Request
          ✓ max_files: 5 files (max: 20)
          ✗ max_lines: 450 lines exceeds limit of 400
            Expected: 400

        Branch
          ✓ pattern: Branch "feature/ABC-1-x" matches pattern

        ──────────────────────────────────────────────────
        Result: 2 passed, 1 failed

    ANSI styling is emitted only when *color* is true.
    """
    buf = StringIO()
    console = Console(
        file=buf,
        force_terminal=color,
        no_color=not color,
        highlight=False,
        width=120,
    )

    def emit(renderable: Text | str) -> None:
        console.print(renderable, soft_wrap=True)

    emit(Text(f"check-my-process v{version}", style="bold"))
    emit("")
    emit(Text(f"Checking PR #{pr_number} in {repo}..."))
    emit("")

    for category, results in group_results_by_category(summary.results).items():
        emit(Text(category, style="bold underline"))
        for result in results:
            emit(_result_line(result))
        emit("")

    emit(Text("─" * _SEPARATOR_WIDTH, style="dim"))

    totals = Text("Result: ")
    totals.append(f"{summary.passed} passed", style="green")
    totals.append(", ")
    totals.append(f"{summary.failed} failed", style="red" if summary.failed else "")
    if summary.skipped:
        totals.append(f", {summary.skipped} skipped", style="dim")
    emit(totals)

    return buf.getvalue().rstrip("\n")


def format_json(
    summary: CheckSummary,
    *,
    version: str,
    repo: str,
    pr_number: int,
) -> str:
    """Format a CheckSummary as JSON.

    Top-level keys: ``version``, ``repo``, ``pr``, ``passed``, ``failed``,
    ``skipped``, ``has_errors``, ``results``.
    """
    output: dict[str, object] = {
        "version": version,
        "repo": repo,
        "pr": pr_number,
        "passed": summary.passed,
        "failed": summary.failed,
        "skipped": summary.skipped,
        "has_errors": summary.has_errors,
        "results": [r.to_dict() for r in summary.results],
    }
    return json.dumps(output, indent=2)
