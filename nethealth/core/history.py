"""Reconstruction of the previous run's outcome from the status log.

There is no persisted state object. The most recent line tagged with
an interface is the only memory of what happened last time, so this
module isolates the fragile text matching from the decision logic in
suppression.py. Every failure mode degrades toward "log more".
"""

import re
from collections.abc import Iterable
from datetime import datetime

from .models import HistoryStatus, LogEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

ERROR_MARKERS: tuple[str, ...] = ("DOWN", "Issue", "Test: Fail")
HEALTHY_MARKER = "OK"

_BRACKETED = re.compile(r"\[([^\]]*)\]")


class HistoryReader:
    """Finds and classifies the last status line for an interface.

    All methods are static as the class carries no state.
    """

    @staticmethod
    def parse_timestamp(line: str) -> datetime | None:
        """Parse the first two whitespace tokens as ``date time``.

        Returns None instead of raising; None means "force logging".
        """
        tokens = line.split(maxsplit=2)
        if len(tokens) < 2:
            return None
        try:
            return datetime.strptime(f"{tokens[0]} {tokens[1]}", TIMESTAMP_FORMAT)
        except ValueError:
            return None

    @staticmethod
    def parse_line(line: str) -> LogEntry | None:
        """Turn a raw log line into a LogEntry.

        Layout: '<date> <time> [TAG] [<interface>] <body>'. The interface
        is the second bracketed token; lines without one (e.g. the
        rotation marker) carry interface None. Blank lines yield None.
        """
        stripped = line.rstrip("\r\n")
        if not stripped.strip():
            return None

        timestamp = HistoryReader.parse_timestamp(stripped)
        if timestamp is not None:
            tokens = stripped.split(maxsplit=2)
            remainder = tokens[2] if len(tokens) > 2 else ""
        else:
            # Unknown prefix; resynchronize on the first bracket
            start = stripped.find("[")
            remainder = stripped[start:] if start >= 0 else stripped

        # Leading bracketed tokens: [TAG] then [interface]
        brackets: list[str] = []
        position = 0
        for match in _BRACKETED.finditer(remainder):
            if len(brackets) == 2 or remainder[position:match.start()].strip():
                break
            brackets.append(match.group(1))
            position = match.end()

        return LogEntry(
            timestamp=timestamp,
            interface=brackets[1] if len(brackets) == 2 else None,
            body=remainder[position:].strip(),
            raw=stripped,
        )

    @staticmethod
    def last_entry_for_interface(lines: Iterable[str], interface: str) -> LogEntry | None:
        """Return the most recent line tagged ``[interface]``, or None.

        Lines are appended chronologically, so the last match wins.
        """
        tag = f"[{interface}]"
        last_line: str | None = None
        for line in lines:
            if tag in line:
                last_line = line
        if last_line is None:
            return None
        return HistoryReader.parse_line(last_line)

    @staticmethod
    def classify(entry: LogEntry) -> HistoryStatus:
        """Classify an entry by the markers in its text.

        Error markers win over the healthy marker, so
        'Issue: DNS issue detected. Connectivity still OK' is ERRORED.
        """
        if any(marker in entry.body for marker in ERROR_MARKERS):
            return HistoryStatus.ERRORED
        if HEALTHY_MARKER in entry.body:
            return HistoryStatus.HEALTHY
        return HistoryStatus.UNRECOGNIZED
