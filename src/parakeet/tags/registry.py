"""Tag registry loading.

A registry is a YAML file listing the tags a collection knows about::

    tag:
      - key: network
        desc: Networking notes
      - key: draft

A bare top-level list of the same records is accepted as well.

Collections tagged by older tooling may keep the same records as TOML in
`tags.toml` or `tag.toml`. Those files are not read; convert them to YAML or
point `tags.registry_filename` at a YAML copy. Loading warns when one sits
next to a missing YAML registry so the disabled tag checks are not silent.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator, List

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import RegistryLoadError

LOGGER = logging.getLogger(__name__)

DEFAULT_REGISTRY_FILENAME = "tags.yaml"
LEGACY_REGISTRY_FILENAMES = ("tags.toml", "tag.toml")


class TagDefinition(BaseModel):
    """A known tag and its optional description."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    desc: str = ""

    @field_validator("key")
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("tag key must not be empty")
        return value

    @field_validator("desc", mode="before")
    @classmethod
    def _desc_default(cls, value: Any) -> Any:
        return "" if value is None else value


class _RegistryFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tag: List[TagDefinition] = Field(default_factory=list)


class TagRegistry:
    """Immutable mapping from tag key to description, in declaration order."""

    def __init__(self, definitions: Iterable[TagDefinition] = ()) -> None:
        self._definitions: dict[str, TagDefinition] = {}
        for definition in definitions:
            if definition.key in self._definitions:
                raise RegistryLoadError(f"duplicate tag key in registry: {definition.key}")
            self._definitions[definition.key] = definition

    @classmethod
    def empty(cls) -> "TagRegistry":
        """Return a registry with no definitions."""
        return cls()

    @classmethod
    def load(cls, path: Path) -> "TagRegistry":
        """Load a registry from ``path``.

        A missing file yields an empty registry.

        Raises:
            RegistryLoadError: If the file cannot be read, is not valid YAML, or
                does not describe a list of ``{key, desc}`` records.
        """

        if not path.exists():
            legacy = [path.with_name(name) for name in LEGACY_REGISTRY_FILENAMES]
            found = next((candidate for candidate in legacy if candidate.exists()), None)
            if found is not None:
                LOGGER.warning(
                    "Found %s but no %s; TOML registries are not read, convert it to YAML.",
                    found.name,
                    path.name,
                )
            else:
                LOGGER.debug("No tag registry at %s; tag checks disabled.", path)
            return cls.empty()

        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise RegistryLoadError(f"failed to read tags file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise RegistryLoadError(f"failed to parse tags file {path}: {exc}") from exc

        if raw is None:
            return cls.empty()
        if isinstance(raw, list):
            raw = {"tag": raw}
        if not isinstance(raw, dict):
            raise RegistryLoadError(f"tags file {path} must contain a mapping or a list")

        try:
            parsed = _RegistryFile.model_validate(raw)
        except ValidationError as exc:
            raise RegistryLoadError(f"invalid tags file {path}: {exc}") from exc

        registry = cls(parsed.tag)
        LOGGER.debug("Loaded %d tag definitions from %s", len(registry), path)
        return registry

    @classmethod
    def load_or_empty(cls, path: Path) -> "TagRegistry":
        """Load ``path``, degrading to an empty registry when it cannot be parsed."""
        try:
            return cls.load(path)
        except RegistryLoadError as exc:
            LOGGER.warning("Ignoring tag registry: %s", exc)
            return cls.empty()

    @property
    def is_empty(self) -> bool:
        return not self._definitions

    @property
    def keys(self) -> list[str]:
        return list(self._definitions)

    def description(self, key: str) -> str:
        """Return the description of ``key``, or an empty string."""
        definition = self._definitions.get(key)
        return definition.desc if definition else ""

    def undefined(self, tags: Iterable[str]) -> list[str]:
        """Return the entries of ``tags`` that are not registered, in order."""
        return [tag for tag in tags if tag not in self._definitions]

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[TagDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


__all__ = [
    "DEFAULT_REGISTRY_FILENAME",
    "LEGACY_REGISTRY_FILENAMES",
    "TagDefinition",
    "TagRegistry",
]
