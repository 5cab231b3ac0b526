"""
Configuration management for the x3dpinner package.

This module provides a clean interface for loading and validating the TOML
configuration file, with singleton caching of the result.
"""

# Main configuration interface
from .manager import (
    DEFAULT_CONFIG_PATH,
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    log_config_summary,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import get_command_sections, get_general_section, load_toml_file
from .validators import (
    validate_command_rule,
    validate_command_rules,
    validate_pinner_config,
)

__all__ = [
    # Main interface
    "DEFAULT_CONFIG_PATH",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "log_config_summary",
    # Advanced interface
    "load_toml_file",
    "get_general_section",
    "get_command_sections",
    "validate_command_rule",
    "validate_command_rules",
    "validate_pinner_config",
]
