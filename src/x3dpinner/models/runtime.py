"""
Runtime data models.

This module contains the structures describing the processes observed during
a single scan, and the states the poll loop moves through.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ProcessInfo:
    """
    What the pinner knows about one running process at snapshot time.
    """

    pid: int
    # Real uid of the process owner; None when it could not be read.
    owner: Optional[int]
    # Command line tokens as reported by the kernel.
    cmdline: Tuple[str, ...] = ()
    # Short process name, used in log lines only.
    name: str = ""


# A point-in-time view of all running processes, keyed by pid.
ProcessSnapshot = Dict[int, ProcessInfo]


class LoopState(Enum):
    """Phases of one poll loop iteration."""
    IDLE = "idle"
    SCANNING = "scanning"
    FILTERING = "filtering"
    EXECUTING = "executing"
    BOOKKEEPING = "bookkeeping"
    SLEEPING = "sleeping"
