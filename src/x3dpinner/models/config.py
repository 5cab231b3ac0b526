"""
Configuration data models.

This module contains the immutable configuration structures produced by the
config loader and consumed by the poll loop.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


DEFAULT_POLL_INTERVAL_MS = 5000


@dataclass(frozen=True)
class CommandRule:
    """
    A named command executed for processes whose image name matches one of
    the rule's prefix patterns, loaded from a ``[commands.<name>]`` table.
    """

    # The table key the rule was declared under (e.g. "pin-games").
    name: str
    # Command template; every "{}" is replaced with the pid of the process.
    command_template: str
    # Prefix patterns matched against the image name. Empty never matches.
    patterns: Tuple[str, ...] = ()
    # Structured argument vector, set when the command was given as a list.
    # When present it is used instead of splitting command_template.
    argv_template: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class PinnerConfig:
    """
    The root configuration object, loaded once before the poll loop starts.
    """

    # Configured username and the uid it resolved to.
    username: str
    target_owner: int
    # Rules in declaration order.
    rules: Tuple[CommandRule, ...]
    # Prefixes exempt from the owner check (usually root-owned launchers).
    allowed_root_patterns: Tuple[str, ...] = ()
    # Prefixes that unconditionally disqualify a process.
    excluded_patterns: Tuple[str, ...] = ()
    # Delay between two scans, in milliseconds.
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    # Upper bound for a single command in seconds. None blocks until the child exits.
    command_timeout: Optional[float] = None

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0
