"""The user configuration file and its environment overrides."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import ParakeetConfig
from .resolver import resolve_with_precedence, set_path

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.parakeet/config.yaml")
ENV_PREFIX = "PARAKEET__"


def overrides_from_env(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``PARAKEET__SECTION__KEY`` variables into a nested override mapping.

    Values are read as YAML scalars or flow collections, so ``true``, ``3`` and
    ``[pdf, txt]`` arrive typed. Text that is not valid YAML is kept verbatim.
    """

    overrides: dict[str, Any] = {}
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        segments = [part.lower() for part in name[len(ENV_PREFIX) :].split("__") if part]
        if not segments:
            continue
        try:
            value = yaml.safe_load(raw)
        except yaml.YAMLError:
            value = raw
        set_path(overrides, segments, value, source="environment")
    return overrides


def render_config(data: Mapping[str, Any]) -> str:
    """Return the on-disk text for ``data``: a usage header, a UTC stamp, then YAML."""
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    header = (
        "# Parakeet settings. Edit here or run `parakeet config set KEY --value VALUE`.\n"
        f"# Any key can be overridden per shell with {ENV_PREFIX}SECTION__KEY=value.\n"
        f"# Last updated: {stamp}\n"
    )
    return header + yaml.safe_dump(dict(data), sort_keys=False)


class ConfigManager:
    """Read and write ``~/.parakeet/config.yaml`` and resolve the effective settings.

    Args:
        config_path: File to use instead of the default location.
        environ: Environment consulted for overrides; defaults to ``os.environ``.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self.environ = os.environ if environ is None else environ

    def ensure_exists(self) -> Path:
        """Write the default settings if the file is missing and return its path."""
        if not self.config_path.exists():
            LOGGER.debug("Creating default configuration at %s", self.config_path)
            self.write(ParakeetConfig().model_dump(mode="python"))
        return self.config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> ParakeetConfig:
        """Return the settings after applying file, environment, and CLI layers.

        Args:
            cli_overrides: Values taken from command flags, keyed by dotted path.
            include_env: Whether ``PARAKEET__*`` variables are applied.

        Raises:
            ConfigError: If any layer is unreadable or the result is invalid.
        """

        return resolve_with_precedence(
            defaults=ParakeetConfig(),
            file_overrides=self.file_overrides(),
            env_overrides=overrides_from_env(self.environ) if include_env else None,
            cli_overrides=cli_overrides,
        )

    def file_overrides(self) -> dict[str, Any]:
        """Return the mapping stored in the file, or an empty one when it is absent.

        Raises:
            ConfigError: If the file is not YAML or its top level is not a mapping.
        """

        text = self.read_text()
        try:
            data = yaml.safe_load(text) if text else None
        except yaml.YAMLError as exc:
            raise ConfigError(f"{self.config_path} is not valid YAML: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path} must contain a mapping of sections")
        return data

    def write(self, data: Mapping[str, Any]) -> None:
        """Replace the file contents with ``data``."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(render_config(data), encoding="utf-8")

    def read_text(self) -> str:
        """Return the raw file text, or an empty string when the file is absent."""
        if not self.config_path.exists():
            return ""
        return self.config_path.read_text(encoding="utf-8")


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "overrides_from_env",
    "render_config",
]
