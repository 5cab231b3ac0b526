"""
Process classification for the x3dpinner package.

This module decides which processes are candidates in an iteration and which
rules apply to each of them.
"""

from .eligibility import filter_eligible, is_eligible
from .matcher import get_image_name, matches, matching_rules

__all__ = [
    "filter_eligible",
    "get_image_name",
    "is_eligible",
    "matches",
    "matching_rules",
]
