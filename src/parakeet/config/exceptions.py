"""Configuration errors."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when the config file, an override, or a merged value is invalid.

    Attributes:
        keys: Dotted keys the problem was traced to, when known.
    """

    def __init__(self, message: str, *, keys: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.keys = keys
