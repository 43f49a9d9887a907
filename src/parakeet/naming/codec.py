"""Encode and decode the `{identifier}--{comment}__{tag1}_{tag2}.{extension}` grammar.

The grammar has no escaping. Comments and tags containing the structural
delimiters encode without complaint but will not decode back to the same
record; authoring paths (see :mod:`parakeet.tags.editor`) reject such tags.
"""

from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from .errors import MalformedNameError

PRIMARY_DELIMITER = "--"
SECONDARY_DELIMITER = "__"
TAG_DELIMITER = "_"
EXTENSION_SEPARATOR = "."


class Record(BaseModel):
    """Decoded representation of one formatted file name.

    Attributes:
        identifier: Sortable timestamp identifier (canonically `YYYYMMDDTHHMMSS`).
        comment: Human-readable free text.
        tags: Classification tags in file-name order.
        extension: Extension without the leading dot; empty when absent.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    comment: str
    tags: List[str] = Field(default_factory=list)
    extension: str = ""

    def with_tags(self, tags: Iterable[str]) -> "Record":
        """Return a copy of the record carrying ``tags``."""
        return self.model_copy(update={"tags": list(tags)})

    def same_tags(self, tags: Iterable[str]) -> bool:
        """Return whether ``tags`` equals the record's tags as a set."""
        return set(self.tags) == set(tags)


def split_extension(name: str) -> tuple[str, str]:
    """Split ``name`` on its last dot.

    Args:
        name: File name without directory components.

    Returns:
        tuple[str, str]: Base name and extension (without the dot). The
        extension is empty when the name contains no dot.
    """

    base, separator, extension = name.rpartition(EXTENSION_SEPARATOR)
    if not separator:
        return name, ""
    return base, extension


def encode(record: Record) -> str:
    """Return the file name for ``record``."""

    name = f"{record.identifier}{PRIMARY_DELIMITER}{record.comment}"
    if record.tags:
        name += SECONDARY_DELIMITER + TAG_DELIMITER.join(record.tags)
    if record.extension:
        name += EXTENSION_SEPARATOR + record.extension
    return name


def decode(name: str) -> Record:
    """Parse a file name into a :class:`Record`.

    Every `__`-separated group after the first contributes its `_`-separated
    pieces to the tag list, so `id--c__a_b__c.md` yields tags `a, b, c`.

    Args:
        name: File name without directory components.

    Returns:
        Record: Decoded record.

    Raises:
        MalformedNameError: If the name is empty or its first group lacks `--`.
    """

    if not name:
        raise MalformedNameError("invalid filename format: empty name")

    base, extension = split_extension(name)
    groups = base.split(SECONDARY_DELIMITER)
    head = groups[0].split(PRIMARY_DELIMITER, 1)
    if len(head) != 2:
        raise MalformedNameError(f"invalid timestamp-comment format: {groups[0]!r} in {name!r}")

    tags: list[str] = []
    for group in groups[1:]:
        tags.extend(group.split(TAG_DELIMITER))

    return Record(identifier=head[0], comment=head[1], tags=tags, extension=extension)


def is_well_formed(name: str) -> bool:
    """Return whether ``name`` decodes successfully."""
    try:
        decode(name)
    except MalformedNameError:
        return False
    return True


def normalize_extensions(values: Iterable[str]) -> list[str]:
    """Return extension filters stripped of whitespace and leading dots.

    Comma-separated values are split so `pdf,txt` and two separate `pdf`/`txt`
    values are equivalent.
    """

    normalized: list[str] = []
    for value in values:
        for part in value.split(","):
            cleaned = part.strip().lstrip(EXTENSION_SEPARATOR)
            if cleaned and cleaned not in normalized:
                normalized.append(cleaned)
    return normalized


def matches_extensions(name: str, extensions: Iterable[str]) -> bool:
    """Return whether ``name`` carries one of ``extensions``, ignoring case.

    An empty filter matches every name.
    """

    filters = list(extensions)
    if not filters:
        return True
    _, extension = split_extension(name)
    folded = extension.casefold()
    return any(
        folded == candidate.lstrip(EXTENSION_SEPARATOR).casefold() for candidate in filters
    )


__all__ = [
    "PRIMARY_DELIMITER",
    "SECONDARY_DELIMITER",
    "TAG_DELIMITER",
    "Record",
    "decode",
    "encode",
    "is_well_formed",
    "matches_extensions",
    "normalize_extensions",
    "split_extension",
]
