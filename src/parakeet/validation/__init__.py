"""Directory validation for formatted file names."""

from .checker import ConsistencyChecker, validate_directory
from .models import ValidationReport

__all__ = ["ConsistencyChecker", "ValidationReport", "validate_directory"]
