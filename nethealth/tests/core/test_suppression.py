"""Unit tests for SuppressionPolicy.

Each test builds the log state and last entry by hand; "now" is fixed
so the staleness and coherence windows are deterministic.
"""

from datetime import datetime, timedelta

import pytest

from nethealth.core.history import HistoryReader
from nethealth.core.models import LogEntry, LogFileState, SuppressionConfig
from nethealth.core.suppression import SuppressionPolicy

NOW = datetime(2026, 3, 1, 12, 0, 0)
TAG = "[INTERNET-HEALTH-CHECK]"


def _entry(timestamp: datetime, body: str, interface: str = "eth0") -> LogEntry:
    entry = HistoryReader.parse_line(
        f"{timestamp:%Y-%m-%d %H:%M:%S} {TAG} [{interface}] {body}"
    )
    assert entry is not None
    return entry


@pytest.fixture
def policy() -> SuppressionPolicy:
    return SuppressionPolicy(staleness_hours=24, coherence_seconds=60)


@pytest.fixture
def enabled() -> SuppressionConfig:
    return SuppressionConfig(reduce_disk_wear=True, durable=True)


def _state(mtime: datetime | None, exists: bool = True) -> LogFileState:
    return LogFileState(durable=True, exists=exists, size_bytes=100, modified_at=mtime)


class TestShortCircuits:
    """Branches that log before any history is consulted."""

    def test_disabled_always_logs(self, policy) -> None:
        config = SuppressionConfig(reduce_disk_wear=False, durable=True)
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime - timedelta(seconds=5), "OK")
        assert policy.should_log_healthy(config, _state(mtime), last, NOW) is True

    def test_console_mode_always_logs(self, policy) -> None:
        config = SuppressionConfig(reduce_disk_wear=True, durable=False)
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime, "OK")
        assert policy.should_log_healthy(config, _state(mtime), last, NOW) is True

    def test_missing_log_logs(self, policy, enabled) -> None:
        state = LogFileState(durable=True, exists=False)
        assert policy.should_log_healthy(enabled, state, None, NOW) is True

    def test_missing_mtime_logs(self, policy, enabled) -> None:
        last = _entry(NOW - timedelta(minutes=10), "OK")
        assert policy.should_log_healthy(enabled, _state(None), last, NOW) is True

    def test_stale_log_logs_regardless_of_history(self, policy, enabled) -> None:
        mtime = NOW - timedelta(hours=25)
        last = _entry(mtime - timedelta(seconds=5), "OK")
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is True

    def test_exactly_at_staleness_window_logs(self, policy, enabled) -> None:
        mtime = NOW - timedelta(hours=24)
        last = _entry(mtime, "OK")
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is True


class TestHistoryBranches:
    """Branches that depend on the last entry for the interface."""

    def test_recent_ok_is_suppressed(self, policy, enabled) -> None:
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime - timedelta(seconds=5), "OK")
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is False

    def test_recent_down_logs(self, policy, enabled) -> None:
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime - timedelta(seconds=5), "DOWN")
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is True

    @pytest.mark.parametrize(
        "body",
        [
            "Issue: DNS issue detected. Connectivity still OK",
            "Test: Fail during Ping - 1.1.1.1 did not respond",
            "DOWN - CONNECTIVITY OUTAGE detected",
        ],
    )
    def test_error_to_ok_transition_logs(self, policy, enabled, body: str) -> None:
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime, body)
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is True

    def test_no_prior_entry_logs(self, policy, enabled) -> None:
        mtime = NOW - timedelta(minutes=10)
        assert policy.should_log_healthy(enabled, _state(mtime), None, NOW) is True

    def test_unrecognized_entry_logs(self, policy, enabled) -> None:
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime, "Test: Pass via Pi-hole (127.0.0.1:53)")
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is True

    def test_unparseable_timestamp_logs(self, policy, enabled) -> None:
        mtime = NOW - timedelta(minutes=10)
        last = HistoryReader.parse_line(f"not-a-date xx {TAG} [eth0] OK")
        assert last is not None and last.timestamp is None
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is True

    def test_ok_outside_coherence_window_logs(self, policy, enabled) -> None:
        """An OK from an older batch: another interface wrote since."""
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime - timedelta(minutes=5), "OK")
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is True

    def test_ok_at_coherence_boundary_is_suppressed(self, policy, enabled) -> None:
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime - timedelta(seconds=60), "OK")
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is False

    def test_ok_timestamp_after_mtime_uses_absolute_difference(self, policy, enabled) -> None:
        mtime = NOW - timedelta(minutes=10)
        last = _entry(mtime + timedelta(seconds=30), "OK")
        assert policy.should_log_healthy(enabled, _state(mtime), last, NOW) is False


class TestConstruction:
    """Window validation."""

    def test_rejects_non_positive_staleness(self) -> None:
        with pytest.raises(ValueError):
            SuppressionPolicy(staleness_hours=0)

    def test_rejects_negative_coherence(self) -> None:
        with pytest.raises(ValueError):
            SuppressionPolicy(coherence_seconds=-1)
