"""Data classes shared by the rule functions, the engine, and the formatters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from check_my_process.config.schema import Config
    from check_my_process.github.models import PullRequestSnapshot

STATUS_PASSED = "passed"
STATUS_FAILED = "failed"
STATUS_SKIPPED = "skipped"


@dataclass(frozen=True)
class CheckContext:
    """Everything a rule function may look at."""

    snapshot: PullRequestSnapshot
    config: Config


@dataclass(frozen=True)
class CheckResult:
    """Verdict of one rule."""

    rule: str  # "<category>.<name>", e.g. "pr.max_files"
    status: str  # "passed" | "failed" | "skipped"
    message: str
    severity: str  # "error" | "warning"
    expected: str | int | None = None
    actual: str | int | None = None

    @property
    def category(self) -> str:
        return self.rule.partition(".")[0]

    @property
    def name(self) -> str:
        return self.rule.partition(".")[2]

    def to_dict(self) -> dict[str, object]:
        """Serialisable form; ``expected``/``actual`` are omitted when unset."""
        data: dict[str, object] = {
            "rule": self.rule,
            "status": self.status,
            "message": self.message,
        }
        if self.expected is not None:
            data["expected"] = self.expected
        if self.actual is not None:
            data["actual"] = self.actual
        data["severity"] = self.severity
        return data


@dataclass(frozen=True)
class CheckSummary:
    """All results of one run plus their status counts."""

    results: tuple[CheckResult, ...]
    passed: int
    failed: int
    skipped: int
    has_errors: bool

