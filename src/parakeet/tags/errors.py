"""Tag registry and tag editing errors."""


class TagError(Exception):
    """Base exception for tag operations."""


class InvalidTagCharacterError(TagError, ValueError):
    """Raised when an authored tag is empty or contains a reserved character."""


class RegistryLoadError(TagError):
    """Raised when a tag registry file exists but cannot be parsed."""


class TagPromptError(TagError):
    """Raised when the user aborts an interactive tag prompt."""
