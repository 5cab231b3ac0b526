"""
Command-line interface for the x3d-pinner daemon.

This module provides the entry point that loads the configuration, sets up
logging and signal handling, and runs the poll loop until the process is
terminated.
"""

import argparse
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from ..config import DEFAULT_CONFIG_PATH, get_config, set_config_path
from ..monitoring import PollLoop
from ..validation import ConfigurationError, ValidationError, handle_cli_error, validate_enum_choice

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

logger = logging.getLogger(__name__)


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``level``."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging.

    Informational records go to stdout; warnings and failures go to stderr.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    stdout_handler.addFilter(_BelowLevelFilter(logging.WARNING))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING)

    logging.basicConfig(
        level=getattr(logging, level),
        handlers=[stdout_handler, stderr_handler],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="x3d-pinner",
        description="Run configured commands (e.g. taskset) for newly started processes.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the configuration file. Defaults to {DEFAULT_CONFIG_PATH}.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help=f"Logging level, one of {LOG_LEVELS}. Defaults to INFO.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single scan and exit instead of polling forever.",
    )
    return parser


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for x3d-pinner.

    Loads the configuration (terminating with exit status 1 when it is
    invalid or the user cannot be resolved), then runs the poll loop until
    SIGINT or SIGTERM is received.

    Raises:
        SystemExit: On configuration errors.
    """
    args = build_parser().parse_args(argv)

    try:
        log_level = validate_enum_choice(
            args.log_level, LOG_LEVELS, field_name="--log-level", case_sensitive=False
        )
    except ValidationError as e:
        configure_logging()
        handle_cli_error(error=e, context="argument validation", exit_code=2, logger=logger)
    configure_logging(log_level)

    set_config_path(args.config)
    try:
        config = get_config()
    except ConfigurationError as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    poll_loop = PollLoop(config)

    def signal_handler(signum, frame):
        """Stop the loop at its next sleep."""
        logger.info(f"Signal {signal.strsignal(signum)} received. Stopping x3d-pinner...")
        poll_loop.stop()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Started x3d-pinner")
    poll_loop.run(max_iterations=1 if args.once else None)
    logger.info("x3d-pinner stopped")


if __name__ == "__main__":
    main_cli()
