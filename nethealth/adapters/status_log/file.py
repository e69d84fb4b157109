"""File status log adapter.

Implements StatusLogPort by appending timestamped lines to a plain-text
log file. Reads and stats fail open: an unreadable log looks like a
log with no history, which makes the caller write rather than suppress.
"""

import logging
import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from nethealth.core.history import TIMESTAMP_FORMAT
from nethealth.core.models import LogFileState
from nethealth.core.ports import StatusLogPort

from .rotation import LogRotator

logger = logging.getLogger(__name__)

DEFAULT_TAG = "[INTERNET-HEALTH-CHECK]"
DEFAULT_TAIL_BYTES = 256 * 1024


class FileStatusLog(StatusLogPort):
    """Appends status lines to a file and reads its tail back."""

    def __init__(
        self,
        path: str | Path,
        rotator: LogRotator,
        tag: str = DEFAULT_TAG,
        tail_bytes: int = DEFAULT_TAIL_BYTES,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the file status log.

        Args:
            path: Log file path. Parent directories are created on first write.
            rotator: Rotation policy for this log.
            tag: Tag written after the timestamp on every line.
            tail_bytes: How much of the file end to read for history.
                Entries older than the tail count as absent.
            clock: Source of line timestamps (local time).

        Raises:
            ValueError: If path is a filesystem root or tail_bytes is not positive.
        """
        self.path = Path(path)
        if self.path.parent == self.path:
            raise ValueError(f"log path cannot be a filesystem root: {path}")
        if tail_bytes <= 0:
            raise ValueError("tail_bytes must be positive")
        self.rotator = rotator
        self.tag = tag
        self.tail_bytes = tail_bytes
        self.clock = clock

    @property
    def durable(self) -> bool:
        return True

    def format_line(self, body: str) -> str:
        """Render '<timestamp> <tag> <body>'."""
        return f"{self.clock().strftime(TIMESTAMP_FORMAT)} {self.tag} {body}"

    def append(self, body: str) -> None:
        """Append one line, creating the log directory if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(self.format_line(body) + "\n")

    def state(self) -> LogFileState:
        try:
            stat = self.path.stat()
        except FileNotFoundError:
            return LogFileState(durable=True, exists=False)
        except OSError as e:
            logger.warning(f"Cannot stat status log {self.path}: {e}")
            return LogFileState(durable=True, exists=False)

        return LogFileState(
            durable=True,
            exists=True,
            size_bytes=stat.st_size,
            modified_at=datetime.fromtimestamp(stat.st_mtime),
        )

    def read_tail(self) -> list[str]:
        """Return complete lines from the last ``tail_bytes`` of the log."""
        try:
            with self.path.open("rb") as handle:
                handle.seek(0, os.SEEK_END)
                size = handle.tell()
                start = max(0, size - self.tail_bytes)
                handle.seek(start)
                data = handle.read()
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning(f"Cannot read status log {self.path}: {e}")
            return []

        lines = data.decode("utf-8", errors="replace").splitlines()
        if start > 0 and lines:
            # First line is a fragment cut by the seek
            lines = lines[1:]
        return lines

    def rotate_if_needed(self) -> bool:
        return self.rotator.rotate_if_needed(self.path)
