"""
Command preparation and execution utilities.

This module turns a rule's command template into an argument vector for a
given pid and runs it as a child process, capturing its output.
"""

import logging
import subprocess
from typing import List, Optional, Sequence, Tuple

from ..models.results import (
    CommandNonZeroExit,
    CommandSpawnFailure,
    CommandSuccess,
    CommandTimeout,
    ExecutionOutcome,
)

logger = logging.getLogger(__name__)

PID_PLACEHOLDER = "{}"


def substitute_pid(template: str, pid: int) -> str:
    """Replace every ``{}`` in ``template`` with the decimal form of ``pid``.

    Examples:
        >>> substitute_pid("taskset -c 2-3 {}", 1234)
        'taskset -c 2-3 1234'
        >>> substitute_pid("renice -n 5 -p {} {}", 7)
        'renice -n 5 -p 7 7'
    """
    return template.replace(PID_PLACEHOLDER, str(pid))


def split_command(command: str) -> List[str]:
    """Split a command string on single space characters.

    No quoting or escaping is understood, and consecutive spaces produce
    empty arguments. Existing configurations rely on this exact behaviour;
    rules that need arguments containing spaces use the list form instead.
    """
    return command.split(" ")


def prepare_command(
    command_template: str, pid: int, argv_template: Optional[Sequence[str]] = None
) -> Tuple[List[str], str]:
    """Build the argument vector for running a rule against ``pid``.

    Args:
        command_template: Command string with ``{}`` placeholders.
        pid: Process id to substitute.
        argv_template: Optional structured argument list. When given, each
            element is substituted on its own and nothing is split.

    Returns:
        Tuple of (argv, display_string) where display_string is argv joined
        with single spaces, used in log lines.
    """
    if argv_template is not None:
        argv = [substitute_pid(arg, pid) for arg in argv_template]
    else:
        argv = split_command(substitute_pid(command_template, pid))
    return argv, " ".join(argv)


def run_command(argv: Sequence[str], timeout: Optional[float] = None) -> ExecutionOutcome:
    """Run ``argv`` without a shell and classify how it ended.

    The call blocks until the child exits. With ``timeout`` set, the child is
    killed once the timeout elapses.

    Args:
        argv: Executable followed by its arguments.
        timeout: Optional limit in seconds.

    Returns:
        CommandSuccess, CommandNonZeroExit, CommandSpawnFailure or CommandTimeout.

    Note:
        Output is decoded as UTF-8 with replacement characters, so a child
        writing invalid bytes never raises.
    """
    logger.debug(f"Executing command: {list(argv)}")
    if not argv or not argv[0]:
        return CommandSpawnFailure(reason="No executable given")
    try:
        process = subprocess.run(
            list(argv),
            shell=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return CommandTimeout(
            timeout=e.timeout,
            stdout=_decode_partial(e.stdout),
            stderr=_decode_partial(e.stderr),
        )
    except OSError as e:
        # FileNotFoundError, PermissionError, exec format errors
        return CommandSpawnFailure(reason=str(e))

    if process.returncode != 0:
        return CommandNonZeroExit(
            code=process.returncode, stdout=process.stdout, stderr=process.stderr
        )
    return CommandSuccess(stdout=process.stdout, stderr=process.stderr)


def _decode_partial(data) -> str:
    """Decode output captured before a timeout, which may be bytes or None."""
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
