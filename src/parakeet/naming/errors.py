"""Naming and filesystem errors."""


class NamingError(Exception):
    """Base exception for file-name operations."""


class MalformedNameError(NamingError, ValueError):
    """Raised when a file name does not follow the `{id}--{comment}__{tags}` grammar."""


class TargetMissingError(NamingError, FileNotFoundError):
    """Raised when a target directory or file does not exist."""


class RenameCollisionError(NamingError, FileExistsError):
    """Raised when a rename destination already exists."""


class IdentifierNotFoundError(NamingError):
    """Raised when no file carries the requested identifier."""


class AmbiguousIdentifierError(NamingError):
    """Raised when several files share the requested identifier."""
