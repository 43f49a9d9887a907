"""Rename plan data models."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class RenameOperation(BaseModel):
    """Represents a single file rename.

    Attributes:
        source: Original file path prior to the rename.
        destination: Target path after the rename.
        identifier: Identifier assigned by the rename, when one was generated.
    """

    source: Path
    destination: Path
    identifier: Optional[str] = None


class SkippedEntry(BaseModel):
    """An entry left untouched by a plan, with the reason."""

    name: str
    reason: str


class OperationPlan(BaseModel):
    """Ordered renames for one directory snapshot."""

    renames: List[RenameOperation] = Field(default_factory=list)
    skipped: List[SkippedEntry] = Field(default_factory=list)


class FailedRename(BaseModel):
    """A rename that could not be applied."""

    operation: RenameOperation
    error: str


class ExecutionResult(BaseModel):
    """Outcome of applying an :class:`OperationPlan`."""

    applied: List[RenameOperation] = Field(default_factory=list)
    failed: List[FailedRename] = Field(default_factory=list)
    dry_run: bool = False
