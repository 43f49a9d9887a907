"""File-level tag operations: show, set, and interactive edit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel

from parakeet.naming import MalformedNameError, Record, TargetMissingError, decode, encode
from parakeet.organization import rename_path

from .editor import TagEditor, validate_tag

LOGGER = logging.getLogger(__name__)


class TagChange(BaseModel):
    """Result of a tag operation on one file."""

    source: Path
    destination: Path
    record: Record
    changed: bool


def load_record(path: Path) -> Record:
    """Decode the file name of an existing file.

    Raises:
        TargetMissingError: If ``path`` does not exist.
        IsADirectoryError: If ``path`` is a directory.
        MalformedNameError: If the name does not follow the grammar.
    """

    if not path.exists():
        raise TargetMissingError(f"file does not exist: {path}")
    if path.is_dir():
        raise IsADirectoryError(f"cannot edit tags for directory: {path}")
    try:
        return decode(path.name)
    except MalformedNameError as exc:
        raise MalformedNameError(f"file name is not in correct format: {exc}") from exc


def set_file_tags(
    path: Path,
    tags: Iterable[str],
    editor: Optional[TagEditor] = None,
) -> TagChange:
    """Replace the tags of the file at ``path``, renaming it when they change.

    Raises:
        InvalidTagCharacterError: If any tag is blank or contains a reserved character.
        RenameCollisionError: If the new name is already taken.
    """

    cleaned = [validate_tag(tag) for tag in tags]
    record = load_record(path)
    updated, changed = (editor or TagEditor()).set_tags(record, cleaned)
    return _apply(path, updated, changed)


def edit_file_tags(path: Path, editor: TagEditor) -> TagChange:
    """Interactively edit the tags of the file at ``path``."""

    record = load_record(path)
    updated, changed = editor.edit_tags(record)
    return _apply(path, updated, changed)


def _apply(path: Path, record: Record, changed: bool) -> TagChange:
    if not changed:
        return TagChange(source=path, destination=path, record=record, changed=False)
    destination = path.with_name(encode(record))
    rename_path(path, destination)
    LOGGER.info("Renamed %s -> %s", path.name, destination.name)
    return TagChange(source=path, destination=destination, record=record, changed=True)


__all__ = ["TagChange", "edit_file_tags", "load_record", "set_file_tags"]
