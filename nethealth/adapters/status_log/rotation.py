"""Size-based rotation of the status log into a gzip backup chain.

Layout: the live log at <path>, backups at <path>.1.gz ... <path>.N.gz,
newest first. The live log is truncated in place, never deleted.

Compress-then-truncate is not atomic with concurrent writers; rotation
assumes a single, non-overlapping invocation at a time.
"""

import gzip
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 2 * 1024 * 1024
DEFAULT_MAX_BACKUPS = 7


class LogRotator:
    """Archives an oversized log into numbered, compressed backups."""

    def __init__(
        self,
        max_bytes: int = DEFAULT_MAX_BYTES,
        max_backups: int = DEFAULT_MAX_BACKUPS,
    ):
        """Initialize the rotator.

        Args:
            max_bytes: Rotate when the log grows beyond this size.
            max_backups: Number of compressed backups to retain.

        Raises:
            ValueError: If either limit is not positive.
        """
        if max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if max_backups <= 0:
            raise ValueError("max_backups must be positive")
        self.max_bytes = max_bytes
        self.max_backups = max_backups

    @staticmethod
    def backup_path(path: Path, index: int) -> Path:
        """Path of backup slot ``index`` for ``path``."""
        return path.with_name(f"{path.name}.{index}.gz")

    def rotate_if_needed(self, path: Path) -> bool:
        """Rotate ``path`` if it exceeds ``max_bytes``.

        Returns:
            True if the log was archived and truncated, False if it was
            missing or within the limit (no change on disk).

        Raises:
            OSError: If shifting, compressing or truncating fails.
        """
        try:
            size = path.stat().st_size
        except FileNotFoundError:
            return False

        if size <= self.max_bytes:
            return False

        logger.info(
            f"Rotating {path} ({size} bytes > {self.max_bytes} bytes, "
            f"keeping {self.max_backups} backups)"
        )
        self._shift_backups(path)

        with path.open("rb") as source, gzip.open(self.backup_path(path, 1), "wb") as target:
            shutil.copyfileobj(source, target)

        # Truncate in place so the path (and any open appenders) stays valid
        with path.open("r+b") as live:
            live.truncate(0)

        return True

    def _shift_backups(self, path: Path) -> None:
        """Free slot 1, evicting the backup that would exceed retention."""
        oldest = self.backup_path(path, self.max_backups)
        oldest.unlink(missing_ok=True)

        for index in range(self.max_backups - 1, 0, -1):
            current = self.backup_path(path, index)
            if current.exists():
                current.replace(self.backup_path(path, index + 1))
