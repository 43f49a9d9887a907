"""Validation report model."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field, computed_field


class ValidationReport(BaseModel):
    """Findings of one directory scan.

    Attributes:
        total: Entries considered after extension filtering.
        valid: Entries whose names decode, duplicates included.
        malformed: Names that failed to decode, in listing order.
        duplicates: Identifier to every entry sharing it, for identifiers seen more than once.
        undefined_tags: Entry name to its tags missing from the registry.
        registry_loaded: Whether a non-empty registry was available for tag checks.
    """

    total: int = 0
    valid: int = 0
    malformed: List[str] = Field(default_factory=list)
    duplicates: Dict[str, List[str]] = Field(default_factory=dict)
    undefined_tags: Dict[str, List[str]] = Field(default_factory=dict)
    registry_loaded: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duplicate_entries(self) -> List[str]:
        return [name for names in self.duplicates.values() for name in names]

    @property
    def has_malformed(self) -> bool:
        return bool(self.malformed)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicates)

    @property
    def has_undefined_tags(self) -> bool:
        return bool(self.undefined_tags)

    @property
    def is_clean(self) -> bool:
        """Return whether every problem category is empty."""
        return not (self.has_malformed or self.has_duplicates or self.has_undefined_tags)

    def counts(self) -> dict[str, int]:
        """Return per-category counts for summary lines."""
        return {
            "total": self.total,
            "valid": self.valid,
            "malformed": len(self.malformed),
            "duplicates": len(self.duplicate_entries),
            "undefined_tags": len(self.undefined_tags),
        }


__all__ = ["ValidationReport"]
