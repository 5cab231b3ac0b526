"""
x3dpinner: run commands for newly started processes.

The daemon polls the process table, selects processes owned by a configured
user (or matching allowed root prefixes), and runs the commands of every rule
whose name prefixes match, typically ``taskset`` calls that pin games to the
V-Cache cores of an X3D CPU. Each process is acted upon once, in the first
scan it appears in.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Field validation and error handling
- system: Process enumeration and command execution
- classification: Prefix matching and eligibility
- executor: Rule command execution and reporting
- monitoring: The poll loop
- cli: Command-line interface

Usage:
    From command line:
        x3d-pinner --config /etc/x3d-pinner.toml

    Programmatically:
        from x3dpinner import PollLoop, get_config
        PollLoop(get_config()).run()
"""

# Main interfaces
from .config import clear_config_cache, get_config, set_config_path
from .monitoring import PollLoop
from .executor import CommandExecutor
from .cli import main_cli

# Model classes for external use
from .models import (
    CommandNonZeroExit,
    CommandRule,
    CommandSpawnFailure,
    CommandSuccess,
    CommandTimeout,
    ExecutionRecord,
    IterationReport,
    PinnerConfig,
    ProcessInfo,
)

# Validation utilities
from .validation import ConfigurationError, IdentityResolutionError, ValidationError

# Classification utilities
from .classification import filter_eligible, matches

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "PollLoop",
    "CommandExecutor",
    "main_cli",
    # Models
    "CommandNonZeroExit",
    "CommandRule",
    "CommandSpawnFailure",
    "CommandSuccess",
    "CommandTimeout",
    "ExecutionRecord",
    "IterationReport",
    "PinnerConfig",
    "ProcessInfo",
    # Errors
    "ConfigurationError",
    "IdentityResolutionError",
    "ValidationError",
    # Classification
    "filter_eligible",
    "matches",
]
