"""
Process monitoring loop for the x3dpinner package.
"""

from .poll_loop import PollLoop

__all__ = [
    "PollLoop",
]
