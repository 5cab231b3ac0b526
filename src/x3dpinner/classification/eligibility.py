"""
Selection of the processes eligible for rule matching in one iteration.

A process qualifies when all of the following hold, checked in order:

1. its owner is known, and is either the configured user or the image name
   starts with one of the allowed root patterns;
2. its pid was not present in the previous snapshot;
3. its image name does not start with any excluded pattern.

Rejected processes are dropped silently.
"""

from typing import AbstractSet, List

from ..models.config import PinnerConfig
from ..models.runtime import ProcessInfo, ProcessSnapshot
from .matcher import get_image_name, matches


def is_eligible(
    process: ProcessInfo, previous_ids: AbstractSet[int], config: PinnerConfig
) -> bool:
    """Decide whether ``process`` should be matched against the rules this iteration."""
    if process.owner is None:
        return False
    image_name = get_image_name(process.cmdline)
    if process.owner != config.target_owner and not matches(
        image_name, config.allowed_root_patterns
    ):
        return False
    if process.pid in previous_ids:
        return False
    return not matches(image_name, config.excluded_patterns)


def filter_eligible(
    snapshot: ProcessSnapshot, previous_ids: AbstractSet[int], config: PinnerConfig
) -> List[ProcessInfo]:
    """Return the eligible processes of ``snapshot``, in snapshot order."""
    return [
        process
        for process in snapshot.values()
        if is_eligible(process, previous_ids, config)
    ]
