"""
The scan → filter → match → execute loop.

Each iteration takes a fresh process snapshot, selects the eligible processes,
runs every matching rule for each of them, and then remembers the pids of the
whole snapshot. A pid present in the previous snapshot is never eligible, so
a process is acted upon once, in the first iteration it is seen, and again
only if its pid disappears and is later reused.
"""

import logging
import threading
from typing import Callable, FrozenSet, Optional

from ..classification.eligibility import filter_eligible
from ..classification.matcher import get_image_name, matching_rules
from ..executor.command_executor import CommandExecutor
from ..models.config import PinnerConfig
from ..models.results import IterationReport
from ..models.runtime import LoopState, ProcessInfo, ProcessSnapshot
from ..system.processes import take_snapshot

logger = logging.getLogger(__name__)


class PollLoop:
    """
    Owns the state carried between iterations and drives the loop.

    ``seen_pids`` always holds the full pid set of the most recent snapshot;
    it is replaced, never merged, after every successful scan. Iterations and
    the commands within them run sequentially on the calling thread.
    """

    def __init__(
        self,
        config: PinnerConfig,
        snapshot_source: Optional[Callable[[], ProcessSnapshot]] = None,
        executor: Optional[CommandExecutor] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        """
        Args:
            config: Validated configuration.
            snapshot_source: Callable returning the current processes;
                defaults to take_snapshot.
            executor: Command executor; defaults to one honouring
                ``config.command_timeout``.
            stop_event: Event that ends ``run`` when set.
        """
        self.config = config
        self.snapshot_source = snapshot_source if snapshot_source is not None else take_snapshot
        self.executor = executor if executor is not None else CommandExecutor(timeout=config.command_timeout)
        self.stop_event = stop_event if stop_event is not None else threading.Event()

        self.seen_pids: FrozenSet[int] = frozenset()
        self.state = LoopState.IDLE
        self.iteration_count = 0

    def run(self, max_iterations: Optional[int] = None) -> int:
        """
        Run iterations separated by the poll interval until stopped.

        The sleep has a fixed length regardless of how long the iteration took.

        Args:
            max_iterations: Stop after this many iterations; None runs until
                ``stop()`` is called.

        Returns:
            Number of iterations completed.
        """
        completed = 0
        logger.debug(f"Poll loop started with interval {self.config.poll_interval:.3f}s")
        while not self.stop_event.is_set():
            self.run_iteration()
            completed += 1
            if max_iterations is not None and completed >= max_iterations:
                break

            self.state = LoopState.SLEEPING
            if self.stop_event.wait(timeout=self.config.poll_interval):
                break
        self.state = LoopState.IDLE
        logger.debug(f"Poll loop finished after {completed} iterations")
        return completed

    def stop(self) -> None:
        """Ask ``run`` to return at its next check; a running command is not interrupted."""
        self.stop_event.set()

    def run_iteration(self) -> IterationReport:
        """Perform one scan, act on newly seen eligible processes, and update ``seen_pids``."""
        self.iteration_count += 1
        report = IterationReport(iteration=self.iteration_count)

        self.state = LoopState.SCANNING
        try:
            snapshot = self.snapshot_source()
        except Exception as e:
            # Keep the previous pid set so the next scan is compared to the last good one.
            logger.error(f"Error while enumerating processes: {e}", exc_info=True)
            report.snapshot_failed = True
            self.state = LoopState.IDLE
            return report
        report.scanned = len(snapshot)

        self.state = LoopState.FILTERING
        eligible = filter_eligible(snapshot, self.seen_pids, self.config)
        report.eligible = [process.pid for process in eligible]

        self.state = LoopState.EXECUTING
        for process in eligible:
            self._handle_process(process, report)

        self.state = LoopState.BOOKKEEPING
        self.seen_pids = frozenset(snapshot)

        self.state = LoopState.IDLE
        return report

    def _handle_process(self, process: ProcessInfo, report: IterationReport) -> None:
        """Run every matching rule for ``process``, or log that none applies."""
        image_name = get_image_name(process.cmdline)
        rules = matching_rules(image_name, self.config.rules)
        if not rules:
            logger.info(f"Implicitly ignoring {image_name} ({process.pid})")
            report.ignored.append(process.pid)
            return

        for rule in rules:
            try:
                report.executions.append(self.executor.execute(rule, process))
            except Exception as e:
                logger.error(
                    f"Unexpected error running command {rule.name} for process "
                    f"{process.name} (pid {process.pid}): {e}",
                    exc_info=True,
                )
