"""Render a :class:`Config` as a commented starter ``cmp.toml``."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from check_my_process.config.loader import config_to_dict

if TYPE_CHECKING:
    from check_my_process.config.schema import Config

_HEADER = """\
# check-my-process configuration
#
# Each rule runs only when its key is set. Remove a key to skip that rule.
# severity: "error" fails the run, "warning" only reports.
"""

_SECTION_COMMENTS: dict[str, str] = {
    "settings": "# Severity used by any section without its own `severity`.",
    "pr": "# Pull request size and review limits.",
    "branch": "# Regular expression the source branch name must match.",
    "ticket": "# Regular expression for a ticket reference, searched in `check_in` fields.",
}


def _toml_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, list):
        return "[" + ", ".join(_toml_value(v) for v in value) + "]"
    # JSON string escapes are valid TOML basic-string escapes.
    return json.dumps(str(value))


def render_config(config: Config) -> str:
    """Return TOML text that loads back to *config*."""
    lines: list[str] = [_HEADER]
    for name, values in config_to_dict(config).items():
        lines.append(_SECTION_COMMENTS.get(name, f"# {name}"))
        lines.append(f"[{name}]")
        for key, value in values.items():
            lines.append(f"{key} = {_toml_value(value)}")
        lines.append("")
    return "\n".join(lines)
