"""
Command outcome and iteration result models.

A command run for a process ends in exactly one of the outcome variants
below. They carry the raw captured fields rather than a formatted message so
callers can decide how to report them.
"""

from dataclasses import dataclass, field
from typing import List, Union

from .config import CommandRule
from .runtime import ProcessInfo


@dataclass(frozen=True)
class CommandSuccess:
    """The command ran and exited with status zero."""

    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return True


@dataclass(frozen=True)
class CommandNonZeroExit:
    """The command ran but reported failure through its exit status."""

    code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return f"ExitCode is non-zero: {self.code} {self.stdout} {self.stderr}"


@dataclass(frozen=True)
class CommandSpawnFailure:
    """The executable could not be launched at all."""

    reason: str

    @property
    def succeeded(self) -> bool:
        return False


@dataclass(frozen=True)
class CommandTimeout:
    """The command did not finish within the configured timeout and was killed."""

    timeout: float
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return f"Timed out after {self.timeout}s {self.stdout} {self.stderr}"


ExecutionOutcome = Union[CommandSuccess, CommandNonZeroExit, CommandSpawnFailure, CommandTimeout]


@dataclass(frozen=True)
class ExecutionRecord:
    """One rule executed for one process."""

    rule: CommandRule
    process: ProcessInfo
    # The command as it was launched, arguments joined with spaces.
    command: str
    outcome: ExecutionOutcome


@dataclass
class IterationReport:
    """
    Summary of one poll loop iteration.

    ``scanned`` is the size of the snapshot, ``eligible`` the pids that passed
    the filter, ``ignored`` the eligible pids no rule matched.
    """

    iteration: int
    scanned: int = 0
    eligible: List[int] = field(default_factory=list)
    ignored: List[int] = field(default_factory=list)
    executions: List[ExecutionRecord] = field(default_factory=list)
    snapshot_failed: bool = False

    @property
    def failures(self) -> List[ExecutionRecord]:
        return [record for record in self.executions if not record.outcome.succeeded]
