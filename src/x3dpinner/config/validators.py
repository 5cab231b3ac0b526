"""
Configuration validation utilities.

This module turns the parsed TOML data into a validated PinnerConfig. Every
problem is reported as a ConfigurationError so the caller can abort before
the poll loop starts.
"""

import logging
import threading
from typing import Any, Callable, Dict, Tuple

from ..models.config import DEFAULT_POLL_INTERVAL_MS, CommandRule, PinnerConfig
from ..system.processes import resolve_user_uid
from ..validation import (
    ConfigurationError,
    ValidationError,
    validate_command,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)
from .loader import get_command_sections, get_general_section

logger = logging.getLogger(__name__)

# Longest wait threading.Event.wait() accepts on this platform
MAX_POLL_INTERVAL_MS = int(threading.TIMEOUT_MAX * 1000)


def validate_command_rule(name: str, section: Dict[str, Any]) -> CommandRule:
    """
    Validate one ``[commands.<name>]`` table.

    Args:
        name: The table key, used as the rule name
        section: Raw table contents

    Returns:
        Validated CommandRule

    Raises:
        ConfigurationError: If the command is missing or a field is malformed
    """
    if "command" not in section:
        raise ConfigurationError(f"Section {name} has no command", field_name=f"commands.{name}.command")

    command = validate_command(section["command"], field_name=f"commands.{name}.command")
    patterns = validate_string_list(section.get("processes"), field_name=f"commands.{name}.processes")

    if isinstance(command, tuple):
        rule = CommandRule(
            name=name,
            command_template=" ".join(command),
            patterns=patterns,
            argv_template=command,
        )
    else:
        rule = CommandRule(name=name, command_template=command, patterns=patterns)

    if not patterns:
        logger.warning(f"Rule {name} has no processes and will never match")
    logger.info(
        f"Loaded {rule.name} with command {rule.command_template} "
        f"with {len(rule.patterns)} processes"
    )
    return rule


def validate_command_rules(config_data: Dict[str, Any]) -> Tuple[CommandRule, ...]:
    """
    Validate every rule table.

    Raises:
        ConfigurationError: If any rule is invalid or no rule is defined
    """
    rules = tuple(
        validate_command_rule(name, section)
        for name, section in get_command_sections(config_data).items()
    )
    if not rules:
        raise ConfigurationError("No commands configured.", field_name="commands")
    return rules


def validate_pinner_config(
    config_data: Dict[str, Any],
    uid_resolver: Callable[[str], int] = resolve_user_uid,
) -> PinnerConfig:
    """
    Validate and create a PinnerConfig from raw configuration data.

    Args:
        config_data: Parsed TOML document
        uid_resolver: Maps the configured username to a uid

    Returns:
        Validated PinnerConfig instance

    Raises:
        ConfigurationError: If validation fails
        IdentityResolutionError: If the username does not resolve
    """
    general = get_general_section(config_data)

    try:
        if general.get("username") is None:
            raise ConfigurationError("No username configured", field_name="general.username")
        username = validate_non_empty_string(general["username"], field_name="general.username")

        poll_interval_ms = validate_positive_integer(
            general.get("sleep", DEFAULT_POLL_INTERVAL_MS),
            min_value=1,
            max_value=MAX_POLL_INTERVAL_MS,
            field_name="general.sleep",
        )

        command_timeout = general.get("command_timeout")
        if command_timeout is not None:
            command_timeout = validate_positive_float(
                command_timeout,
                min_value=0.001,
                max_value=threading.TIMEOUT_MAX,
                field_name="general.command_timeout",
            )

        allowed_root_patterns = validate_string_list(
            general.get("allow_root_processes"), field_name="general.allow_root_processes"
        )
        excluded_patterns = validate_string_list(
            general.get("exclude_processes"), field_name="general.exclude_processes"
        )

        rules = validate_command_rules(config_data)
    except ConfigurationError:
        raise
    except ValidationError as e:
        raise ConfigurationError(str(e), field_name=e.field_name, value=e.value) from e

    # IdentityResolutionError propagates unchanged
    target_owner = uid_resolver(username)

    return PinnerConfig(
        username=username,
        target_owner=target_owner,
        rules=rules,
        allowed_root_patterns=allowed_root_patterns,
        excluded_patterns=excluded_patterns,
        poll_interval_ms=poll_interval_ms,
        command_timeout=command_timeout,
    )
