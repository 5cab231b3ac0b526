"""
Validation and error handling for the x3dpinner package.

This module provides input validation for configuration values and the
exception types used to report fatal startup errors.
"""

from .exceptions import (
    ConfigurationError,
    ErrorSeverity,
    IdentityResolutionError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)

from .validators import (
    validate_command,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

__all__ = [
    # Exceptions and handlers
    "ConfigurationError",
    "ErrorSeverity",
    "IdentityResolutionError",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    # Validators
    "validate_command",
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_string_list",
]
