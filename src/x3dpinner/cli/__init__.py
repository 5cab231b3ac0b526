"""
Command-line interface for the x3dpinner package.

This module provides the main CLI entry point for the pinning daemon.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
