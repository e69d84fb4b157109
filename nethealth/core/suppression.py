"""Write-suppression rules for healthy status lines.

The log's own modification time stands in for an explicit "last run"
pointer. It is only trusted when the candidate entry's timestamp and
the file's mtime are close together, i.e. the entry is genuinely the
tail of the most recent write batch.
"""

import logging
from datetime import datetime, timedelta

from .history import HistoryReader
from .models import HistoryStatus, LogEntry, LogFileState, SuppressionConfig

logger = logging.getLogger(__name__)


class SuppressionPolicy:
    """Decides whether a healthy status is worth writing.

    Pure decision logic, no side effects. Every uncertain branch
    returns True: a lost diagnostic write is worse than an extra one.
    """

    def __init__(
        self,
        staleness_hours: int = 24,
        coherence_seconds: int = 60,
    ):
        if staleness_hours <= 0:
            raise ValueError("staleness_hours must be positive")
        if coherence_seconds < 0:
            raise ValueError("coherence_seconds must be non-negative")
        self.staleness_window = timedelta(hours=staleness_hours)
        self.coherence_window = timedelta(seconds=coherence_seconds)

    def should_log_healthy(
        self,
        config: SuppressionConfig,
        log_state: LogFileState,
        last_entry: LogEntry | None,
        now: datetime,
    ) -> bool:
        """Should this run write an OK line for the interface?

        Short-circuits on the first branch that says "log":
        1. Write reduction disabled
        2. Console (non-durable) output
        3. Log file missing
        4. Log untouched for the staleness window (heartbeat)
        5. No prior entry for the interface
        6. Prior entry is an error or unrecognized (state transition)
        7. Prior OK entry not within the coherence window of the mtime

        Args:
            config: Write-reduction settings.
            log_state: Existence and mtime of the status log.
            last_entry: Most recent entry for this interface, if any.
            now: Current local time, comparable with log timestamps.
        """
        if not config.reduce_disk_wear:
            return True

        if not config.durable or not log_state.durable:
            return True

        if not log_state.exists or log_state.modified_at is None:
            return True

        mtime = log_state.modified_at
        if now - mtime >= self.staleness_window:
            logger.debug(f"Status log untouched since {mtime}, writing heartbeat")
            return True

        if last_entry is None:
            return True

        if HistoryReader.classify(last_entry) is not HistoryStatus.HEALTHY:
            return True

        if last_entry.timestamp is None:
            logger.debug(f"Unparseable timestamp in {last_entry.raw!r}, not suppressing")
            return True

        drift = abs(last_entry.timestamp - mtime)
        if drift <= self.coherence_window:
            return False

        return True
