"""
Unit tests for the eligibility filter.

Covers the owner check with its root allow-list, the previous-snapshot
check, and the exclusion list.
"""

import pytest

from x3dpinner.classification.eligibility import filter_eligible, is_eligible
from conftest import ROOT_UID


@pytest.mark.unit
class TestIsEligible:
    """Test cases for the single-process predicate."""

    @pytest.fixture(autouse=True)
    def _config(self, test_utils):
        self.utils = test_utils
        self.config = test_utils.make_config(
            allowed_root_patterns=["/usr/bin/gamescope"],
            excluded_patterns=["/usr/lib/steam"],
        )

    def test_process_of_target_user_is_eligible(self):
        process = self.utils.make_process(10, ["wine", "game.exe"])
        assert is_eligible(process, frozenset(), self.config) is True

    def test_unknown_owner_is_never_eligible(self):
        process = self.utils.make_process(10, ["/usr/bin/gamescope"], owner=None)
        assert is_eligible(process, frozenset(), self.config) is False

    def test_other_owner_is_rejected(self):
        process = self.utils.make_process(10, ["wine", "game.exe"], owner=ROOT_UID)
        assert is_eligible(process, frozenset(), self.config) is False

    def test_other_owner_allowed_by_root_pattern(self):
        process = self.utils.make_process(10, ["/usr/bin/gamescope", "-f"], owner=ROOT_UID)
        assert is_eligible(process, frozenset(), self.config) is True

    def test_pid_in_previous_snapshot_is_rejected(self):
        process = self.utils.make_process(10, ["wine", "game.exe"])
        assert is_eligible(process, frozenset({10}), self.config) is False

    def test_excluded_pattern_rejects_target_user_process(self):
        process = self.utils.make_process(10, ["/usr/lib/steam/steam", "-silent"])
        assert is_eligible(process, frozenset(), self.config) is False

    def test_excluded_pattern_rejects_allowed_root_process(self):
        config = self.utils.make_config(
            allowed_root_patterns=["/usr/bin/gamescope"],
            excluded_patterns=["/usr/bin/gamescope --nested"],
        )
        process = self.utils.make_process(10, ["/usr/bin/gamescope", "--nested"], owner=ROOT_UID)
        assert is_eligible(process, frozenset(), config) is False


@pytest.mark.unit
class TestFilterEligible:
    """Test cases for filtering a whole snapshot."""

    def test_filter_keeps_snapshot_order(self, test_utils):
        config = test_utils.make_config()
        snapshot = test_utils.make_snapshot(
            test_utils.make_process(30, ["c"]),
            test_utils.make_process(10, ["a"]),
            test_utils.make_process(20, ["b"], owner=ROOT_UID),
        )
        eligible = filter_eligible(snapshot, frozenset(), config)
        assert [process.pid for process in eligible] == [30, 10]

    def test_filter_uses_previous_ids_only(self, test_utils):
        config = test_utils.make_config()
        snapshot = test_utils.make_snapshot(
            test_utils.make_process(10, ["a"]),
            test_utils.make_process(11, ["b"]),
        )
        eligible = filter_eligible(snapshot, frozenset({11, 99}), config)
        assert [process.pid for process in eligible] == [10]

    def test_empty_snapshot(self, test_utils):
        assert filter_eligible({}, frozenset({1, 2}), test_utils.make_config()) == []
