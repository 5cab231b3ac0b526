"""
Configuration management and singleton pattern.

This module provides the main configuration loading interface, caching the
validated configuration so it is read only once per process.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import PinnerConfig
from ..validation import ErrorSeverity, handle_config_error
from .loader import load_toml_file
from .validators import validate_pinner_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[PinnerConfig] = None

# Default location of the configuration file. Overridden by the CLI --config
# option or by tests through set_config_path().
DEFAULT_CONFIG_PATH = Path("/etc/x3d-pinner.toml")
_CONFIG_FILE_PATH = DEFAULT_CONFIG_PATH


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Clears any cached configuration so the next get_config() call reads the
    new file.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.debug(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def log_config_summary(config: PinnerConfig) -> None:
    """Log the startup summary of a loaded configuration."""
    logger.info(f"Sleep configured for {config.poll_interval_ms} millis")
    logger.info(f"Loaded {len(config.allowed_root_patterns)} allowed-root-processes")
    logger.info(f"Loaded {len(config.excluded_patterns)} processes_to_exclude")
    logger.info(f"Loaded {len(config.rules)} command_configs")
    if config.command_timeout is not None:
        logger.info(f"Commands time out after {config.command_timeout} seconds")


def _load_config(config_path: Path) -> PinnerConfig:
    """
    Load and validate the configuration file.

    Raises:
        ConfigurationError: If the file is unreadable, malformed or incomplete
        IdentityResolutionError: If the configured username is unknown
    """
    try:
        config_data = load_toml_file(config_path, "configuration file")
        config = validate_pinner_config(config_data)
    except Exception as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}",
            severity=ErrorSeverity.DEBUG,
            reraise=True,
            logger=logger,
        )

    logger.info(f"Resolved user {config.username} to uid {config.target_owner}")
    log_config_summary(config)
    return config


def get_config() -> PinnerConfig:
    """
    Get the pinner configuration, loading it if necessary.

    The first call loads and validates the configuration file; subsequent
    calls return the cached instance.

    Raises:
        ConfigurationError: If the configuration is invalid
        IdentityResolutionError: If the configured username is unknown
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "rules_count": len(_CONFIG.rules) if _CONFIG else 0,
    }
