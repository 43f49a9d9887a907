"""Tag selection and merging for a single record."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from parakeet.naming import Record

from .errors import InvalidTagCharacterError
from .prompts import TagPrompter
from .registry import TagRegistry

LOGGER = logging.getLogger(__name__)

RESERVED_TAG_CHARACTERS = "/_-."
ADD_CUSTOM_TAG = "[+ Add custom tag]"
DESCRIPTION_SEPARATOR = " - "
SELECT_MESSAGE = "Select tags (toggle numbers, enter to confirm):"
CUSTOM_TAG_MESSAGE = "Enter custom tag"


def validate_tag(tag: str) -> str:
    """Return ``tag`` trimmed, rejecting values the file-name grammar cannot hold.

    Raises:
        InvalidTagCharacterError: If the tag is blank, equals the custom-tag
            choice, or contains one of `/ _ - .`.
    """

    cleaned = tag.strip()
    if not cleaned:
        raise InvalidTagCharacterError("tag cannot be empty")
    if cleaned == ADD_CUSTOM_TAG:
        raise InvalidTagCharacterError(f"{ADD_CUSTOM_TAG} is reserved and cannot be a tag")
    if any(char in cleaned for char in RESERVED_TAG_CHARACTERS):
        raise InvalidTagCharacterError(
            f"tag {cleaned!r} cannot contain special characters (/, _, -, .)"
        )
    return cleaned


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Return ``tags`` sorted with duplicates removed."""
    return sorted(set(tags))


def key_from_display(text: str) -> str:
    """Return the tag key of a `key - description` display string."""
    return text.split(DESCRIPTION_SEPARATOR, 1)[0]


class TagEditor:
    """Compute new tag sets for records.

    Args:
        registry: Known tags offered as candidates.
        prompter: Interactive front end; required only by :meth:`edit_tags`.
    """

    def __init__(self, registry: TagRegistry | None = None, prompter: TagPrompter | None = None):
        self.registry = registry if registry is not None else TagRegistry.empty()
        self.prompter = prompter

    def set_tags(self, record: Record, tags: Iterable[str]) -> tuple[Record, bool]:
        """Replace the record's tags.

        The new tags are sorted and deduplicated. ``changed`` is False when they
        equal the current tags as a set, in which case the record is returned
        unchanged.

        Returns:
            tuple[Record, bool]: Updated record and whether a rename is needed.
        """

        normalized = normalize_tags(tags)
        if record.same_tags(normalized):
            return record, False
        return record.with_tags(normalized), True

    def edit_tags(self, record: Record) -> tuple[Record, bool]:
        """Run the interactive selection loop and apply the result via :meth:`set_tags`.

        Raises:
            TagPromptError: If the user aborts a prompt.
            RuntimeError: If no prompter was configured.
        """

        if self.prompter is None:
            raise RuntimeError("interactive tag editing requires a prompter")
        return self.set_tags(record, self._select(self.prompter, record.tags))

    def display(self, key: str) -> str:
        """Return the option label for ``key``."""
        description = self.registry.description(key)
        if description:
            return f"{key}{DESCRIPTION_SEPARATOR}{description}"
        return key

    def build_options(self, current: Sequence[str]) -> list[str]:
        """Return current tags, then unused registry tags, then the custom-tag choice."""
        seen: set[str] = set()
        options: list[str] = []
        for key in [*current, *self.registry.keys]:
            if key in seen:
                continue
            seen.add(key)
            options.append(self.display(key))
        options.append(ADD_CUSTOM_TAG)
        return options

    def _select(self, prompter: TagPrompter, current: Sequence[str]) -> list[str]:
        options = self.build_options(current)
        defaults = [self.display(tag) for tag in dict.fromkeys(current)]

        while True:
            selected = prompter.select_multiple(SELECT_MESSAGE, options, defaults)
            chosen = [key_from_display(item) for item in selected if item != ADD_CUSTOM_TAG]
            if ADD_CUSTOM_TAG not in selected:
                return sorted(chosen)

            custom = self._ask_custom_tag(prompter)
            if custom not in chosen:
                chosen.append(custom)
            label = self.display(custom)
            if label not in options:
                options.insert(0, label)
            defaults = [self.display(tag) for tag in chosen]
            LOGGER.debug("Added custom tag %s", custom)

    @staticmethod
    def _ask_custom_tag(prompter: TagPrompter) -> str:
        while True:
            raw = prompter.input_text(CUSTOM_TAG_MESSAGE)
            try:
                return validate_tag(raw)
            except InvalidTagCharacterError as exc:
                prompter.warn(str(exc))


__all__ = [
    "ADD_CUSTOM_TAG",
    "RESERVED_TAG_CHARACTERS",
    "TagEditor",
    "key_from_display",
    "normalize_tags",
    "validate_tag",
]
