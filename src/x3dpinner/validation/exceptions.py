"""
Exception types and error handling helpers.

This module provides the error taxonomy used by the pinner together with
small helpers that log an error at a given severity and optionally re-raise it.
Startup errors (configuration, identity resolution) are fatal; everything that
happens while handling a single process is logged and swallowed by the loop.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when a configuration value fails validation.

    This is the base exception type of the validation system.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ConfigurationError(ValidationError):
    """
    Raised when the configuration file is unreadable, malformed or incomplete.

    Always fatal: the pinner refuses to start its loop with a partial
    configuration.
    """

    def __init__(self, message: str, field_name: Optional[str] = None, value: Any = None):
        super().__init__(message, field_name=field_name, value=value,
                         severity=ErrorSeverity.CRITICAL)


class IdentityResolutionError(ConfigurationError):
    """Raised when the configured username does not map to a known user."""

    def __init__(self, username: str):
        super().__init__(f"No user named {username}", field_name="general.username",
                         value=username)
        self.username = username


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    # Handle both enum and string severity values
    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


# Convenience aliases for specific error types
def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a fatal CLI error and terminate the process."""
    exit_code = kwargs.pop('exit_code', 1)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
