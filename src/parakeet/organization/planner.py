"""Planner for directory-wide identifier generation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from parakeet.naming import (
    DirectoryEntry,
    IdentifierClock,
    Record,
    encode,
    is_well_formed,
    matches_extensions,
    split_extension,
)

from .models import OperationPlan, RenameOperation, SkippedEntry

LOGGER = logging.getLogger(__name__)


class IdentifierPlanner:
    """Derive rename plans that give unformatted files a unique identifier."""

    def __init__(self, clock: Optional[IdentifierClock] = None) -> None:
        self.clock = clock or IdentifierClock()

    def build_plan(
        self,
        root: Path,
        entries: Iterable[DirectoryEntry],
        *,
        extensions: Iterable[str] = (),
    ) -> OperationPlan:
        """Produce a plan renaming every unformatted file under ``root``.

        Args:
            root: Directory the entries were listed from.
            entries: Snapshot of the directory, in processing order.
            extensions: Optional extension allow-list (case-insensitive).

        Returns:
            OperationPlan: Renames in listing order plus skipped entries.
        """

        snapshot = list(entries)
        filters = list(extensions)
        existing = self.clock.collect_existing(snapshot)
        occupied = {entry.name for entry in snapshot}
        plan = OperationPlan()

        for entry in snapshot:
            if entry.is_dir or not matches_extensions(entry.name, filters):
                continue
            if is_well_formed(entry.name):
                plan.skipped.append(SkippedEntry(name=entry.name, reason="already formatted"))
                continue

            comment, extension = split_extension(entry.name)
            identifier = self.clock.unique(existing)
            existing.add(identifier)
            new_name = encode(Record(identifier=identifier, comment=comment, extension=extension))

            if new_name in occupied:
                LOGGER.warning("Target file already exists, skipping: %s", new_name)
                plan.skipped.append(
                    SkippedEntry(name=entry.name, reason=f"target already exists: {new_name}")
                )
                continue

            occupied.add(new_name)
            plan.renames.append(
                RenameOperation(
                    source=root / entry.name,
                    destination=root / new_name,
                    identifier=identifier,
                )
            )
            LOGGER.debug("Planned rename %s -> %s", entry.name, new_name)

        return plan


__all__ = ["IdentifierPlanner"]
