"""Console status log adapter.

Implements StatusLogPort by printing status lines to stderr. Used when
no log file is configured: nothing persists, so there is no history,
nothing to rotate, and healthy lines are never suppressed.
"""

import sys
from collections.abc import Callable
from datetime import datetime
from typing import TextIO

from nethealth.core.history import TIMESTAMP_FORMAT
from nethealth.core.models import LogFileState
from nethealth.core.ports import StatusLogPort

from .file import DEFAULT_TAG


class StderrStatusLog(StatusLogPort):
    """Prints status lines to a stream, stderr by default."""

    def __init__(
        self,
        tag: str = DEFAULT_TAG,
        stream: TextIO | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.tag = tag
        self.stream = stream
        self.clock = clock

    @property
    def durable(self) -> bool:
        return False

    def append(self, body: str) -> None:
        stream = self.stream if self.stream is not None else sys.stderr
        print(
            f"{self.clock().strftime(TIMESTAMP_FORMAT)} {self.tag} {body}",
            file=stream,
            flush=True,
        )

    def state(self) -> LogFileState:
        return LogFileState(durable=False, exists=False)

    def read_tail(self) -> list[str]:
        return []

    def rotate_if_needed(self) -> bool:
        return False
