"""Tag registry, tag editing, and file-level tag operations."""

from .editor import (
    ADD_CUSTOM_TAG,
    RESERVED_TAG_CHARACTERS,
    TagEditor,
    key_from_display,
    normalize_tags,
    validate_tag,
)
from .errors import InvalidTagCharacterError, RegistryLoadError, TagError, TagPromptError
from .operations import TagChange, edit_file_tags, load_record, set_file_tags
from .prompts import RichTagPrompter, TagPrompter
from .registry import DEFAULT_REGISTRY_FILENAME, TagDefinition, TagRegistry

__all__ = [
    "ADD_CUSTOM_TAG",
    "DEFAULT_REGISTRY_FILENAME",
    "RESERVED_TAG_CHARACTERS",
    "InvalidTagCharacterError",
    "RegistryLoadError",
    "RichTagPrompter",
    "TagChange",
    "TagDefinition",
    "TagEditor",
    "TagError",
    "TagPromptError",
    "TagPrompter",
    "TagRegistry",
    "edit_file_tags",
    "key_from_display",
    "load_record",
    "normalize_tags",
    "set_file_tags",
    "validate_tag",
]
