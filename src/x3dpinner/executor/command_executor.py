"""
Execution of rule commands against eligible processes.

The executor substitutes the pid into a rule's command, runs it to
completion, and reports the outcome. Failures are returned as outcome values
and logged; they never propagate to the poll loop.
"""

import logging
from typing import Optional

from ..models.config import CommandRule
from ..models.results import CommandSuccess, ExecutionOutcome, ExecutionRecord
from ..models.runtime import ProcessInfo
from ..system.commands import prepare_command, run_command

logger = logging.getLogger(__name__)


class CommandExecutor:
    """
    Runs rule commands synchronously, one at a time.

    A command without a timeout blocks until the child exits, so a hung
    child stalls the caller.
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Optional limit in seconds for every command.
        """
        self.timeout = timeout

    def execute_command(self, rule: CommandRule, pid: int) -> ExecutionOutcome:
        """Run ``rule`` against ``pid`` and return the classified outcome."""
        argv, _ = prepare_command(rule.command_template, pid, rule.argv_template)
        return run_command(argv, timeout=self.timeout)

    def execute(self, rule: CommandRule, process: ProcessInfo) -> ExecutionRecord:
        """
        Run ``rule`` for ``process`` and log the result.

        Successful runs are logged at INFO with the captured output, every
        kind of failure at ERROR with its reason.

        Args:
            rule: The matching rule.
            process: The process the rule is applied to.

        Returns:
            ExecutionRecord with the launched command and its outcome.
        """
        argv, command = prepare_command(rule.command_template, process.pid, rule.argv_template)
        outcome = run_command(argv, timeout=self.timeout)

        if isinstance(outcome, CommandSuccess):
            logger.info(
                f"Command {rule.name} ({command}) for process {process.name} "
                f"(pid {process.pid}) result {outcome.stdout} {outcome.stderr}"
            )
        else:
            logger.error(
                f"Command {rule.name} ({command}) failed for process {process.name} "
                f"(pid {process.pid}) result {outcome.reason}"
            )

        return ExecutionRecord(rule=rule, process=process, command=command, outcome=outcome)
