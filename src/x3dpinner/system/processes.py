"""
Process enumeration and user identity utilities.

This module provides the process source used by the poll loop, built on
psutil, and resolves the configured username to the uid owner checks compare
against.
"""

import logging
import pwd

import psutil

from ..models.runtime import ProcessInfo, ProcessSnapshot
from ..validation import IdentityResolutionError

logger = logging.getLogger(__name__)

# Attributes pre-fetched by psutil.process_iter for every process
_SNAPSHOT_ATTRS = ["pid", "name", "uids", "cmdline"]


def take_snapshot() -> ProcessSnapshot:
    """Enumerate running processes.

    Returns:
        Mapping of pid to ProcessInfo. ``owner`` is the real uid, or None when
        psutil was denied access to it. Kernel threads have an empty cmdline.

    Note:
        Processes that exit while the scan is in progress are skipped.
    """
    snapshot: ProcessSnapshot = {}
    for proc in psutil.process_iter(_SNAPSHOT_ATTRS):
        try:
            info = proc.info
            uids = info.get("uids")
            snapshot[info["pid"]] = ProcessInfo(
                pid=info["pid"],
                owner=uids.real if uids is not None else None,
                cmdline=tuple(info.get("cmdline") or ()),
                name=info.get("name") or "",
            )
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    logger.debug(f"Snapshot contains {len(snapshot)} processes")
    return snapshot


def resolve_user_uid(username: str) -> int:
    """Look up the uid of ``username`` in the system user database.

    Raises:
        IdentityResolutionError: If no such user exists or the name is not
            a valid user name.
    """
    try:
        return pwd.getpwnam(username).pw_uid
    except (KeyError, ValueError):
        raise IdentityResolutionError(username) from None
