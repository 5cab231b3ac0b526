"""
Field validation functions.

These helpers turn raw values parsed from the TOML configuration into
validated Python values, raising ValidationError with the offending field
name when a value has the wrong shape.
"""

from typing import Any, List, Optional, Tuple, Union

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # bool is an int subclass; "sleep = true" is a typo, not a duration
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(
            f"{field_name} must be a whole number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """Validate that a value is a string with at least one non-blank character."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value


def validate_string_list(value: Any, field_name: str = "value") -> Tuple[str, ...]:
    """
    Validate a list of prefix patterns.

    A single string is accepted as a one-element list so that
    ``processes = "wine"`` behaves like ``processes = ["wine"]``.

    Args:
        value: String or list of strings
        field_name: Name of the field being validated

    Returns:
        Tuple of patterns in configuration order

    Raises:
        ValidationError: If any element is not a string
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise ValidationError(
            f"{field_name} must be a string or a list of strings, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ValidationError(
                f"{field_name} item {i} must be a string, got {item!r}",
                field_name=field_name,
                value=value
            )
    return tuple(value)


def validate_command(
    command: Any, field_name: str = "command"
) -> Union[str, Tuple[str, ...]]:
    """
    Validate a rule command.

    Two forms are accepted: a command string (split on single spaces at
    execution time) or a list of argument strings whose first element is the
    executable.

    Returns:
        The command string, or a tuple of arguments for the list form

    Raises:
        ValidationError: If the command is missing, blank or malformed
    """
    if isinstance(command, list):
        if not command:
            raise ValidationError(
                f"{field_name} must not be an empty list",
                field_name=field_name,
                value=command
            )
        argv = validate_string_list(command, field_name=field_name)
        if not argv[0].strip():
            raise ValidationError(
                f"{field_name} must start with an executable",
                field_name=field_name,
                value=command
            )
        return argv
    return validate_non_empty_string(command, field_name=field_name)


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Returns:
        The matching choice, in the spelling used by ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    return choices[lower_choices.index(lower_value)]
