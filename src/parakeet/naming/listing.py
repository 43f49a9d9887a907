"""Directory snapshot utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from .codec import Record, decode, matches_extensions
from .errors import (
    AmbiguousIdentifierError,
    IdentifierNotFoundError,
    MalformedNameError,
    TargetMissingError,
)


class DirectoryEntry(BaseModel):
    """One entry of a directory snapshot."""

    model_config = ConfigDict(frozen=True)

    name: str
    is_dir: bool = False


class DirectoryLister:
    """Take a single sorted snapshot of a directory's entries.

    Args:
        include_hidden: Whether dot-prefixed entries are listed.
        ignore_names: Entry names never listed (e.g. the tag registry file).
    """

    def __init__(
        self,
        *,
        include_hidden: bool = False,
        ignore_names: Iterable[str] = (),
    ) -> None:
        self.include_hidden = include_hidden
        self.ignore_names = frozenset(ignore_names)

    def snapshot(self, root: Path) -> list[DirectoryEntry]:
        """Return the entries directly under ``root`` sorted by name.

        Raises:
            TargetMissingError: If ``root`` does not exist or is not a directory.
        """

        root = root.expanduser()
        if not root.exists():
            raise TargetMissingError(f"directory does not exist: {root}")
        if not root.is_dir():
            raise TargetMissingError(f"not a directory: {root}")

        entries: list[DirectoryEntry] = []
        for path in root.iterdir():
            name = path.name
            if name in self.ignore_names:
                continue
            if not self.include_hidden and name.startswith("."):
                continue
            entries.append(DirectoryEntry(name=name, is_dir=path.is_dir()))
        return sorted(entries, key=lambda entry: entry.name)

    def files(self, root: Path, extensions: Iterable[str] = ()) -> list[str]:
        """Return names of non-directory entries matching ``extensions``."""
        filters = list(extensions)
        return [
            entry.name
            for entry in self.snapshot(root)
            if not entry.is_dir and matches_extensions(entry.name, filters)
        ]

    def records(self, root: Path, extensions: Iterable[str] = ()) -> list[tuple[str, Record]]:
        """Return ``(name, record)`` pairs for the well-formed files under ``root``."""
        decoded: list[tuple[str, Record]] = []
        for name in self.files(root, extensions):
            try:
                decoded.append((name, decode(name)))
            except MalformedNameError:
                continue
        return decoded

    def find_by_identifier(self, root: Path, identifier: str) -> Path:
        """Return the single file under ``root`` whose identifier is ``identifier``.

        Raises:
            IdentifierNotFoundError: If no file carries the identifier.
            AmbiguousIdentifierError: If more than one file carries it.
        """

        matches = [
            root / name for name, record in self.records(root) if record.identifier == identifier
        ]
        if not matches:
            raise IdentifierNotFoundError(f"no file found with ID: {identifier}")
        if len(matches) > 1:
            joined = "\n".join(str(path) for path in matches)
            raise AmbiguousIdentifierError(f"multiple files found with ID {identifier}:\n{joined}")
        return matches[0]


__all__ = ["DirectoryEntry", "DirectoryLister"]
