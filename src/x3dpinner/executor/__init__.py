"""
Command execution for the x3dpinner package.

This module runs the commands of matching rules against eligible processes.
"""

from .command_executor import CommandExecutor

__all__ = [
    "CommandExecutor",
]
