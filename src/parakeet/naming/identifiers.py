"""Timestamp identifier generation."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterable, Set

from .codec import decode
from .errors import MalformedNameError
from .listing import DirectoryEntry

IDENTIFIER_FORMAT = "%Y%m%dT%H%M%S"


class IdentifierClock:
    """Produce `YYYYMMDDTHHMMSS` identifiers from wall-clock time.

    Args:
        now: Callable returning the current local time. Tests inject a fixed clock.
    """

    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or datetime.now

    def now(self) -> str:
        """Return the identifier for the current instant."""
        return self._now().strftime(IDENTIFIER_FORMAT)

    def unique(self, existing: Set[str]) -> str:
        """Return an identifier absent from ``existing``.

        Starting from :meth:`now`, the candidate advances one second at a time
        until it no longer collides. Callers generating several identifiers in
        one batch add each result to ``existing`` before the next call.

        Args:
            existing: Identifiers already in use.

        Returns:
            str: Collision-free identifier.
        """

        instant = self._now().replace(microsecond=0)
        candidate = instant.strftime(IDENTIFIER_FORMAT)
        while candidate in existing:
            instant += timedelta(seconds=1)
            candidate = instant.strftime(IDENTIFIER_FORMAT)
        return candidate

    @staticmethod
    def collect_existing(entries: Iterable[DirectoryEntry | str]) -> set[str]:
        """Collect identifiers from the well-formed names in ``entries``.

        Directories and malformed names are skipped silently.
        """

        identifiers: set[str] = set()
        for entry in entries:
            if isinstance(entry, DirectoryEntry):
                if entry.is_dir:
                    continue
                name = entry.name
            else:
                name = entry
            try:
                identifiers.add(decode(name).identifier)
            except MalformedNameError:
                continue
        return identifiers


__all__ = ["IDENTIFIER_FORMAT", "IdentifierClock"]
