"""Directory-wide consistency checks for formatted file names."""

from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Optional

from parakeet.naming import (
    DirectoryEntry,
    DirectoryLister,
    MalformedNameError,
    decode,
    matches_extensions,
)
from parakeet.tags import TagRegistry

from .models import ValidationReport

LOGGER = logging.getLogger(__name__)


class ConsistencyChecker:
    """Classify the entries of one directory snapshot and collect naming problems.

    Args:
        registry: Known tags. An empty registry disables undefined-tag checks.
    """

    def __init__(self, registry: Optional[TagRegistry] = None) -> None:
        self.registry = registry if registry is not None else TagRegistry.empty()

    def check(
        self,
        entries: Iterable[DirectoryEntry],
        *,
        extensions: Iterable[str] = (),
    ) -> ValidationReport:
        """Build a report for ``entries``.

        Args:
            entries: Directory snapshot; directories are ignored.
            extensions: Optional extension allow-list (case-insensitive).

        Returns:
            ValidationReport: Fully populated report.
        """

        filters = list(extensions)
        check_tags = not self.registry.is_empty
        report = ValidationReport(registry_loaded=check_tags)
        by_identifier: dict[str, list[str]] = defaultdict(list)

        for entry in entries:
            if entry.is_dir or not matches_extensions(entry.name, filters):
                continue
            report.total += 1

            try:
                record = decode(entry.name)
            except MalformedNameError:
                report.malformed.append(entry.name)
                continue

            report.valid += 1
            by_identifier[record.identifier].append(entry.name)

            if check_tags:
                undefined = self.registry.undefined(record.tags)
                if undefined:
                    report.undefined_tags[entry.name] = undefined

        report.duplicates = {
            identifier: names for identifier, names in by_identifier.items() if len(names) > 1
        }
        LOGGER.debug("Validation counts: %s", report.counts())
        return report


def validate_directory(
    root: Path,
    *,
    lister: DirectoryLister,
    registry_path: Path,
    extensions: Iterable[str] = (),
) -> ValidationReport:
    """Snapshot ``root`` and validate it against the registry at ``registry_path``.

    A registry that cannot be parsed is logged and treated as absent.

    Raises:
        TargetMissingError: If ``root`` does not exist.
    """

    entries = lister.snapshot(root)
    registry = TagRegistry.load_or_empty(registry_path)
    return ConsistencyChecker(registry).check(entries, extensions=extensions)


__all__ = ["ConsistencyChecker", "validate_directory"]
