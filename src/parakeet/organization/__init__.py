"""Rename planning and execution."""

from .executor import OperationExecutor, rename_path
from .models import ExecutionResult, FailedRename, OperationPlan, RenameOperation, SkippedEntry
from .planner import IdentifierPlanner

__all__ = [
    "ExecutionResult",
    "FailedRename",
    "IdentifierPlanner",
    "OperationExecutor",
    "OperationPlan",
    "RenameOperation",
    "SkippedEntry",
    "rename_path",
]
