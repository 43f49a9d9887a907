"""File-name grammar, identifiers, and directory snapshots."""

from .codec import (
    PRIMARY_DELIMITER,
    SECONDARY_DELIMITER,
    TAG_DELIMITER,
    Record,
    decode,
    encode,
    is_well_formed,
    matches_extensions,
    normalize_extensions,
    split_extension,
)
from .errors import (
    AmbiguousIdentifierError,
    IdentifierNotFoundError,
    MalformedNameError,
    NamingError,
    RenameCollisionError,
    TargetMissingError,
)
from .identifiers import IDENTIFIER_FORMAT, IdentifierClock
from .listing import DirectoryEntry, DirectoryLister

__all__ = [
    "PRIMARY_DELIMITER",
    "SECONDARY_DELIMITER",
    "TAG_DELIMITER",
    "IDENTIFIER_FORMAT",
    "Record",
    "decode",
    "encode",
    "is_well_formed",
    "matches_extensions",
    "normalize_extensions",
    "split_extension",
    "IdentifierClock",
    "DirectoryEntry",
    "DirectoryLister",
    "NamingError",
    "MalformedNameError",
    "TargetMissingError",
    "RenameCollisionError",
    "IdentifierNotFoundError",
    "AmbiguousIdentifierError",
]
