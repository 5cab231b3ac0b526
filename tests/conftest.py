"""
Pytest configuration and shared fixtures for the x3dpinner test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the x3dpinner project.
"""

import logging
import sys
import tempfile
import shutil
from pathlib import Path
from typing import Dict, Iterable, List, Optional
from unittest.mock import patch

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from x3dpinner.models import CommandRule, PinnerConfig, ProcessInfo  # noqa: E402

TARGET_UID = 1000
ROOT_UID = 0


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_config_data():
    """Sample configuration data, as parsed from the TOML file."""
    return {
        "general": {
            "username": "alice",
            "sleep": 250,
            "allow_root_processes": ["/usr/bin/gamescope"],
            "exclude_processes": ["/usr/lib/steam"],
        },
        "commands": {
            "pin-games": {
                "command": "taskset -apc 0-7,16-23 {}",
                "processes": ["/home/alice/.steam", "wine"],
            },
            "renice": {
                "command": ["renice", "-n", "-5", "-p", "{}"],
                "processes": ["wine"],
            },
        },
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write the sample configuration to a temporary TOML file."""
    import toml

    path = temp_dir / "x3d-pinner.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture
def mock_pwd():
    """Resolve 'alice' to TARGET_UID and every other name to KeyError."""

    def getpwnam(name):
        if name == "alice":
            return type("struct_passwd", (), {"pw_name": "alice", "pw_uid": TARGET_UID})()
        raise KeyError(f"getpwnam(): name not found: '{name}'")

    with patch("x3dpinner.system.processes.pwd.getpwnam", side_effect=getpwnam) as mock:
        yield mock


@pytest.fixture
def restore_logging():
    """Restore root logger handlers and level changed by configure_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    yield

    from x3dpinner.config import DEFAULT_CONFIG_PATH, set_config_path

    # Also clears the cached configuration
    set_config_path(DEFAULT_CONFIG_PATH)


# ============================================================================
# Test Utilities
# ============================================================================


class TestUtils:
    """Utility functions for testing."""

    @staticmethod
    def make_process(
        pid: int,
        cmdline: Iterable[str],
        owner: Optional[int] = TARGET_UID,
        name: Optional[str] = None,
    ) -> ProcessInfo:
        """Create a ProcessInfo; name defaults to the basename of argv[0]."""
        cmdline = tuple(cmdline)
        if name is None:
            name = cmdline[0].rsplit("/", 1)[-1] if cmdline else ""
        return ProcessInfo(pid=pid, owner=owner, cmdline=cmdline, name=name)

    @staticmethod
    def make_snapshot(*processes: ProcessInfo) -> Dict[int, ProcessInfo]:
        """Create a snapshot from processes."""
        return {process.pid: process for process in processes}

    @staticmethod
    def make_config(
        rules: Iterable[CommandRule] = (),
        allowed_root_patterns: Iterable[str] = (),
        excluded_patterns: Iterable[str] = (),
        **kwargs,
    ) -> PinnerConfig:
        """Create a PinnerConfig for user 'alice' (TARGET_UID)."""
        return PinnerConfig(
            username="alice",
            target_owner=TARGET_UID,
            rules=tuple(rules),
            allowed_root_patterns=tuple(allowed_root_patterns),
            excluded_patterns=tuple(excluded_patterns),
            **kwargs,
        )


class SnapshotSequence:
    """Snapshot source that returns pre-built snapshots one per call."""

    def __init__(self, snapshots: List[Dict[int, ProcessInfo]]):
        self.snapshots = list(snapshots)
        self.calls = 0

    def __call__(self) -> Dict[int, ProcessInfo]:
        snapshot = self.snapshots[min(self.calls, len(self.snapshots) - 1)]
        self.calls += 1
        if isinstance(snapshot, Exception):
            raise snapshot
        return snapshot


@pytest.fixture
def test_utils():
    """Provide test utility functions."""
    return TestUtils


@pytest.fixture
def snapshot_sequence():
    """Factory for SnapshotSequence sources."""
    return SnapshotSequence
