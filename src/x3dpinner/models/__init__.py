"""
Data models for the pinner.

Configuration Models:
- Rules pairing name-prefix patterns with a command template
- The validated, immutable pinner configuration

Runtime Models:
- Per-process information captured in a snapshot
- Poll loop states

Result Models:
- Tagged command outcomes (success, non-zero exit, spawn failure, timeout)
- Execution records and per-iteration reports

All models are dataclasses with type hints.
"""

from .config import DEFAULT_POLL_INTERVAL_MS, CommandRule, PinnerConfig
from .runtime import LoopState, ProcessInfo, ProcessSnapshot
from .results import (
    CommandNonZeroExit,
    CommandSpawnFailure,
    CommandSuccess,
    CommandTimeout,
    ExecutionOutcome,
    ExecutionRecord,
    IterationReport,
)

__all__ = [
    # Configuration
    "DEFAULT_POLL_INTERVAL_MS",
    "CommandRule",
    "PinnerConfig",
    # Runtime
    "LoopState",
    "ProcessInfo",
    "ProcessSnapshot",
    # Results
    "CommandNonZeroExit",
    "CommandSpawnFailure",
    "CommandSuccess",
    "CommandTimeout",
    "ExecutionOutcome",
    "ExecutionRecord",
    "IterationReport",
]
