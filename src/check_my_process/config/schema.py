"""Typed configuration schema: option structs, constants, and defaults."""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CONFIG_FILENAME = "cmp.toml"

VALID_SEVERITIES: frozenset[str] = frozenset({"error", "warning"})
TICKET_LOCATIONS: tuple[str, ...] = ("title", "branch", "body")

DEFAULT_BRANCH_PATTERN = "^(feature|fix|hotfix)/[A-Z]+-[0-9]+-[a-z0-9-]+$"
DEFAULT_TICKET_PATTERN = "[A-Z]+-[0-9]+"

# ---------------------------------------------------------------------------
# Option structs (all frozen)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SettingsConfig:
    """Global settings shared by every rule."""

    default_severity: str = "error"  # "error" | "warning"


@dataclass(frozen=True)
class PrConfig:
    """Pull request size and review thresholds.

    Each threshold is optional; a rule whose threshold is ``None`` is skipped.
    """

    max_files: int | None = None
    max_lines: int | None = None
    min_approvals: int | None = None
    severity: str | None = None


@dataclass(frozen=True)
class BranchConfig:
    """Branch naming rule."""

    pattern: str | None = None
    severity: str | None = None


@dataclass(frozen=True)
class TicketConfig:
    """Ticket reference rule.

    ``check_in`` lists the pull request fields searched for the pattern, in
    the order they are reported.  ``None`` means all of
    :data:`TICKET_LOCATIONS`.
    """

    pattern: str | None = None
    check_in: tuple[str, ...] | None = None
    severity: str | None = None


@dataclass(frozen=True)
class Config:
    """Complete, validated rule configuration."""

    settings: SettingsConfig = SettingsConfig()
    pr: PrConfig | None = None
    branch: BranchConfig | None = None
    ticket: TicketConfig | None = None


DEFAULT_CONFIG = Config(
    settings=SettingsConfig(default_severity="error"),
    pr=PrConfig(max_files=20, max_lines=400, min_approvals=1),
    branch=BranchConfig(pattern=DEFAULT_BRANCH_PATTERN),
    ticket=TicketConfig(pattern=DEFAULT_TICKET_PATTERN, check_in=TICKET_LOCATIONS),
)
