"""Layering of configuration sources.

Every source is a mapping whose keys may be nested or dotted; both
``{"scan": {"include_hidden": True}}`` and ``{"scan.include_hidden": True}``
address the same leaf. Layers are applied in :data:`PRECEDENCE` order on top of
the model defaults, so the last layer to set a leaf wins.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Iterator, Mapping, Sequence

from pydantic import ValidationError

from .exceptions import ConfigError
from .models import ParakeetConfig

PRECEDENCE = ("file", "environment", "cli")


def resolve_with_precedence(
    *,
    defaults: ParakeetConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> ParakeetConfig:
    """Return ``defaults`` with the file, environment, and CLI layers applied.

    Raises:
        ConfigError: If a layer is malformed or the result fails validation. The
            error's ``keys`` name the offending settings.
    """

    layers = {"file": file_overrides, "environment": env_overrides, "cli": cli_overrides}
    data = defaults.model_dump(mode="python")
    for source in PRECEDENCE:
        overrides = layers[source]
        if overrides:
            data = deep_merge(data, nest_dotted(overrides, source=source))

    try:
        return ParakeetConfig.model_validate(data)
    except ValidationError as exc:
        keys = tuple(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        problems = "; ".join(f"{key}: {error['msg']}" for key, error in zip(keys, exc.errors()))
        raise ConfigError(f"Invalid configuration values: {problems}", keys=keys) from exc


def iter_leaves(
    mapping: Mapping[str, Any], prefix: tuple[str, ...] = (), *, source: str = "file"
) -> Iterator[tuple[tuple[str, ...], Any]]:
    """Yield ``(path, value)`` for every non-mapping value in ``mapping``.

    Dotted keys are split into path segments. Empty mappings are yielded as values.
    """

    if not isinstance(mapping, MappingABC):
        raise ConfigError(f"{source} overrides must be a mapping")
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source} override keys must be strings, got {key!r}")
        path = (*prefix, *key.split("."))
        if isinstance(value, MappingABC) and value:
            yield from iter_leaves(value, path, source=source)
        else:
            yield path, value


def nest_dotted(mapping: Mapping[str, Any], *, source: str = "file") -> dict[str, Any]:
    """Return ``mapping`` as a purely nested dictionary."""
    nested: dict[str, Any] = {}
    for path, value in iter_leaves(mapping, source=source):
        set_path(nested, path, value, source=source)
    return nested


def set_path(
    target: dict[str, Any], path: Sequence[str], value: Any, *, source: str = "file"
) -> None:
    """Store ``value`` at ``path`` inside ``target``, creating sections as needed.

    Raises:
        ConfigError: If ``path`` runs through a value that is not a section.
    """

    *sections, leaf = path
    node = target
    for depth, section in enumerate(sections):
        child = node.setdefault(section, {})
        if not isinstance(child, dict):
            blocked = ".".join(path[: depth + 1])
            raise ConfigError(
                f"{source} override {'.'.join(path)} needs {blocked} to be a section",
                keys=(".".join(path),),
            )
        node = child
    node[leaf] = value


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``base`` with ``overrides`` merged in section by section."""
    merged = deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = [
    "PRECEDENCE",
    "deep_merge",
    "iter_leaves",
    "nest_dotted",
    "resolve_with_precedence",
    "set_path",
]
