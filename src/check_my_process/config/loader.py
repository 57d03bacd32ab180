"""Locate, read, merge, and validate ``cmp.toml``."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import asdict, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from check_my_process.config.schema import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    BranchConfig,
    Config,
    PrConfig,
    TicketConfig,
)
from check_my_process.config.validator import validate_config

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigNotFoundError(Exception):
    """Raised when an explicitly requested config file does not exist."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Config file not found: {path}")
        self.path = path


class ConfigParseError(Exception):
    """Raised when a config file cannot be read or is not valid TOML."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to parse config: {message}")


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------


def config_to_dict(config: Config) -> dict[str, dict[str, Any]]:
    """Convert *config* to a plain TOML-shaped document.

    Unset (``None``) fields and absent sections are left out.
    """
    document: dict[str, dict[str, Any]] = {}
    for name in ("settings", "pr", "branch", "ticket"):
        section = getattr(config, name)
        if section is None:
            continue
        values = {key: value for key, value in asdict(section).items() if value is not None}
        if "check_in" in values:
            values["check_in"] = list(values["check_in"])
        document[name] = values
    return document


def _merge_section(current: Any, cls: type, data: Mapping[str, Any] | None) -> Any:
    if data is None:
        return current
    kwargs = dict(data)
    if "check_in" in kwargs:
        kwargs["check_in"] = tuple(kwargs["check_in"])
    return replace(current if current is not None else cls(), **kwargs)


def merge_config(base: Config, overrides: Mapping[str, Any]) -> Config:
    """Overlay a validated *overrides* document onto *base*, field by field.

    Sections missing from *overrides* keep the values from *base*; keys
    missing from an overridden section keep the base value for that key.
    """
    settings_data = overrides.get("settings")
    settings = replace(base.settings, **settings_data) if settings_data else base.settings
    return Config(
        settings=settings,
        pr=_merge_section(base.pr, PrConfig, overrides.get("pr")),
        branch=_merge_section(base.branch, BranchConfig, overrides.get("branch")),
        ticket=_merge_section(base.ticket, TicketConfig, overrides.get("ticket")),
    )


def _overlay_document(
    base: dict[str, dict[str, Any]], overrides: Mapping[str, Any]
) -> dict[str, Any]:
    merged: dict[str, Any] = {name: dict(section) for name, section in base.items()}
    for name, section in overrides.items():
        current = merged.get(name)
        if isinstance(section, dict) and isinstance(current, dict):
            current.update(section)
        else:
            # Non-table values and unknown sections go through untouched
            # so the validator can report them.
            merged[name] = section
    return merged


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_config_path(start_dir: Path | None = None) -> Path | None:
    """Return ``<start_dir>/cmp.toml`` if it exists, else ``None``.

    *start_dir* defaults to the current working directory.
    """
    config_path = (start_dir or Path.cwd()) / CONFIG_FILENAME
    if config_path.is_file():
        return config_path
    return None


def load_config(config_path: Path | str | None = None) -> Config:
    """Load the effective configuration.

    With no *config_path*, ``cmp.toml`` in the current directory is used if
    present, otherwise :data:`DEFAULT_CONFIG` is returned unchanged.  File
    values are overlaid onto the defaults and the result is validated.

    Raises
    ------
    ConfigNotFoundError
        When *config_path* is given but does not exist.
    ConfigParseError
        When the file cannot be read or is not valid TOML.
    ConfigValidationError
        When the merged document breaks the schema.
    """
    path = Path(config_path) if config_path is not None else find_config_path()

    if path is None:
        logger.debug("No %s found, using default config", CONFIG_FILENAME)
        return DEFAULT_CONFIG

    if not path.is_file():
        raise ConfigNotFoundError(path)

    try:
        with path.open("rb") as fh:
            parsed = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigParseError(str(exc)) from exc

    logger.info("Loaded config from %s", path)

    merged = _overlay_document(config_to_dict(DEFAULT_CONFIG), parsed)
    validate_config(merged)
    return merge_config(DEFAULT_CONFIG, parsed)
