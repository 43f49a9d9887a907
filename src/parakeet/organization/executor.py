"""Executor for rename plans."""

from __future__ import annotations

import logging
from pathlib import Path

from parakeet.naming import RenameCollisionError, TargetMissingError

from .models import ExecutionResult, FailedRename, OperationPlan

LOGGER = logging.getLogger(__name__)


def rename_path(source: Path, destination: Path) -> Path:
    """Rename ``source`` to ``destination`` without overwriting.

    Args:
        source: Existing file path.
        destination: New file path.

    Returns:
        Path: The destination path.

    Raises:
        TargetMissingError: If ``source`` does not exist.
        RenameCollisionError: If ``destination`` already exists.
        OSError: If the filesystem rejects the rename.
    """

    if not source.exists():
        raise TargetMissingError(f"file does not exist: {source}")
    if destination.exists() and destination != source:
        raise RenameCollisionError(f"destination already exists: {destination}")
    source.rename(destination)
    return destination


class OperationExecutor:
    """Apply rename plans one entry at a time."""

    def apply(self, plan: OperationPlan, dry_run: bool = False) -> ExecutionResult:
        """Apply every rename in ``plan``, in order.

        A failing rename is logged and recorded; remaining renames still run.

        Args:
            plan: Plan computed by the planner.
            dry_run: When true, report the plan without touching the filesystem.

        Returns:
            ExecutionResult: Applied and failed renames.
        """

        result = ExecutionResult(dry_run=dry_run)
        if dry_run:
            result.applied.extend(plan.renames)
            return result

        for operation in plan.renames:
            try:
                rename_path(operation.source, operation.destination)
            except OSError as exc:
                LOGGER.warning("Error renaming %s: %s", operation.source.name, exc)
                result.failed.append(FailedRename(operation=operation, error=str(exc)))
                continue
            LOGGER.info("Renamed %s -> %s", operation.source.name, operation.destination.name)
            result.applied.append(operation)
        return result


__all__ = ["OperationExecutor", "rename_path"]
