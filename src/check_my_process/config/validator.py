"""Validate a raw configuration document before it becomes a :class:`Config`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from check_my_process.config.schema import TICKET_LOCATIONS, VALID_SEVERITIES

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationError:
    """A single problem found in a configuration document."""

    path: str  # "/section/key", or "/" for the document root
    message: str


class ConfigValidationError(Exception):
    """Raised when a configuration document breaks the schema."""

    def __init__(self, errors: list[ValidationError]) -> None:
        lines = "\n".join(f"  - {e.path}: {e.message}" for e in errors)
        super().__init__(f"Config validation failed:\n{lines}")
        self.errors = errors


# ---------------------------------------------------------------------------
# Section schemas
# ---------------------------------------------------------------------------

_SECTION_KEYS: dict[str, frozenset[str]] = {
    "settings": frozenset({"default_severity"}),
    "pr": frozenset({"max_files", "max_lines", "min_approvals", "severity"}),
    "branch": frozenset({"pattern", "severity"}),
    "ticket": frozenset({"pattern", "check_in", "severity"}),
}

# Minimum accepted value for each integer threshold.
_INT_MINIMUMS: dict[str, int] = {
    "max_files": 1,
    "max_lines": 1,
    "min_approvals": 0,
}


def _is_int(value: object) -> bool:
    # TOML booleans parse to bool, which is an int subclass.
    return isinstance(value, int) and not isinstance(value, bool)


def _check_severity(value: object, path: str, errors: list[ValidationError]) -> None:
    if value not in VALID_SEVERITIES:
        allowed = ", ".join(sorted(VALID_SEVERITIES))
        errors.append(ValidationError(path, f"must be one of: {allowed}"))


def _check_int(
    value: object, path: str, minimum: int, errors: list[ValidationError]
) -> None:
    if not _is_int(value):
        errors.append(ValidationError(path, "must be integer"))
    elif value < minimum:  # type: ignore[operator]
        errors.append(ValidationError(path, f"must be >= {minimum}"))


def _check_check_in(value: object, path: str, errors: list[ValidationError]) -> None:
    if not isinstance(value, list):
        errors.append(ValidationError(path, "must be array"))
        return
    seen: set[object] = set()
    for idx, item in enumerate(value):
        if item not in TICKET_LOCATIONS:
            allowed = ", ".join(TICKET_LOCATIONS)
            errors.append(ValidationError(f"{path}/{idx}", f"must be one of: {allowed}"))
        elif item in seen:
            errors.append(ValidationError(f"{path}/{idx}", f"duplicate location '{item}'"))
        else:
            seen.add(item)


def _check_section(
    name: str, section: object, errors: list[ValidationError]
) -> None:
    base = f"/{name}"
    if not isinstance(section, dict):
        errors.append(ValidationError(base, "must be table"))
        return

    allowed = _SECTION_KEYS[name]
    for key in section:
        if key not in allowed:
            errors.append(ValidationError(base, f"unknown property '{key}'"))

    for key, value in section.items():
        path = f"{base}/{key}"
        if key in ("severity", "default_severity"):
            _check_severity(value, path, errors)
        elif key in _INT_MINIMUMS:
            _check_int(value, path, _INT_MINIMUMS[key], errors)
        elif key == "pattern":
            if not isinstance(value, str):
                errors.append(ValidationError(path, "must be string"))
        elif key == "check_in":
            _check_check_in(value, path, errors)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_validation_errors(document: Any) -> list[ValidationError]:
    """Return every schema problem in *document* (empty when valid)."""
    errors: list[ValidationError] = []

    if not isinstance(document, dict):
        errors.append(ValidationError("/", "must be table"))
        return errors

    if "settings" not in document:
        errors.append(ValidationError("/", "must have required property 'settings'"))
    elif isinstance(document["settings"], dict) and (
        "default_severity" not in document["settings"]
    ):
        errors.append(
            ValidationError("/settings", "must have required property 'default_severity'")
        )

    for name, section in document.items():
        if name not in _SECTION_KEYS:
            errors.append(ValidationError("/", f"unknown property '{name}'"))
            continue
        _check_section(name, section, errors)

    return errors


def validate_config(document: Any) -> bool:
    """Validate *document*, returning ``True`` or raising :class:`ConfigValidationError`."""
    errors = get_validation_errors(document)
    if errors:
        raise ConfigValidationError(errors)
    return True
