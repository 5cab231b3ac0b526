"""
System interaction utilities.

This module provides the pinner's points of contact with the operating system:

- Process enumeration through psutil
- Resolution of the configured username to a uid
- Preparation and blocking execution of rule commands
"""

# Command execution
from .commands import (
    PID_PLACEHOLDER,
    prepare_command,
    run_command,
    split_command,
    substitute_pid,
)

# Process enumeration and identities
from .processes import resolve_user_uid, take_snapshot

__all__ = [
    # Commands
    "PID_PLACEHOLDER",
    "prepare_command",
    "run_command",
    "split_command",
    "substitute_pid",
    # Processes
    "resolve_user_uid",
    "take_snapshot",
]
