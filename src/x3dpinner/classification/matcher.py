"""
Prefix matching of process image names.

A process is identified by its image name: the command line tokens rejoined
with single spaces. Patterns are compared as plain prefixes, with no case
folding, normalization or globbing.
"""

from typing import Iterable, List, Sequence

from ..models.config import CommandRule


def get_image_name(cmdline: Sequence[str]) -> str:
    """Join command line tokens with a single space.

    The result is not necessarily the original invocation string: runs of
    whitespace inside the original command line are not preserved.

    Examples:
        >>> get_image_name(["worker", "--id=1"])
        'worker --id=1'
        >>> get_image_name([])
        ''
    """
    return " ".join(cmdline)


def matches(image_name: str, patterns: Iterable[str]) -> bool:
    """Return True if ``image_name`` starts with at least one of ``patterns``.

    Examples:
        >>> matches("abc123", ["abc"])
        True
        >>> matches("xabc", ["abc"])
        False
        >>> matches("anything", [])
        False
    """
    return any(image_name.startswith(pattern) for pattern in patterns)


def matching_rules(image_name: str, rules: Iterable[CommandRule]) -> List[CommandRule]:
    """Return every rule whose patterns match ``image_name``, in configuration order."""
    return [rule for rule in rules if matches(image_name, rule.patterns)]
