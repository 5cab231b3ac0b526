"""
Configuration file loading utilities.

This module handles the low-level reading and parsing of the TOML
configuration file.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import ConfigurationError

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Failed to load {description} {file_path}: file not found") from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to parse {description} {file_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to load {description} {file_path}: {e}") from e


def get_general_section(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return the ``[general]`` table.

    Raises:
        ConfigurationError: If ``general`` is present but not a table
    """
    general = config_data.get("general", {})
    if not isinstance(general, dict):
        raise ConfigurationError("[general] must be a table", field_name="general")
    return general


def get_command_sections(config_data: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Return the ``[commands.<name>]`` tables keyed by rule name, in file order.

    Raises:
        ConfigurationError: If ``commands`` or one of its entries is not a table
    """
    commands = config_data.get("commands", {})
    if not isinstance(commands, dict):
        raise ConfigurationError("[commands] must be a table of rule tables", field_name="commands")
    for name, section in commands.items():
        if not isinstance(section, dict):
            raise ConfigurationError(
                f"commands.{name} must be a table", field_name=f"commands.{name}"
            )
    return commands
