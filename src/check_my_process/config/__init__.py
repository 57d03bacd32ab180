"""Config domain: schema, defaults, TOML loader, validator, starter template."""

from check_my_process.config.loader import (
    ConfigNotFoundError,
    ConfigParseError,
    config_to_dict,
    find_config_path,
    load_config,
    merge_config,
)
from check_my_process.config.schema import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    TICKET_LOCATIONS,
    VALID_SEVERITIES,
    BranchConfig,
    Config,
    PrConfig,
    SettingsConfig,
    TicketConfig,
)
from check_my_process.config.template import render_config
from check_my_process.config.validator import (
    ConfigValidationError,
    ValidationError,
    get_validation_errors,
    validate_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "TICKET_LOCATIONS",
    "VALID_SEVERITIES",
    "BranchConfig",
    "Config",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "PrConfig",
    "SettingsConfig",
    "TicketConfig",
    "ValidationError",
    "config_to_dict",
    "find_config_path",
    "get_validation_errors",
    "load_config",
    "merge_config",
    "render_config",
    "validate_config",
]
