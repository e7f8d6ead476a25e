"""Helpers for loading YAML configuration files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from viskell.log import DEFAULT_LEVEL

__all__ = ["CONFIG_ENV_VAR", "Settings", "load_config", "load_settings"]

CONFIG_ENV_VAR = "VISKELL_CONFIG"


def load_config(path: str | Path) -> dict[str, Any]:
    """Return the parsed YAML document located at ``path``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document cannot be parsed or its root is not
            a mapping.

    """
    config_path = Path(path)
    if not config_path.exists():
        msg = f"configuration file not found: {config_path}"
        raise FileNotFoundError(msg)
    raw_text = config_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        msg = f"failed to parse configuration: {exc}"
        raise ValueError(msg) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = "configuration root must be a mapping"
        raise ValueError(msg)
    return data


@dataclass(frozen=True)
class Settings:
    """Runtime settings of the type checker.

    Attributes:
        catalog: Path of a catalog YAML file; None selects the bundled one
        log_level: Level of the ``viskell`` logger

    """

    catalog: Path | None = None
    log_level: str = DEFAULT_LEVEL

    @classmethod
    def from_mapping(cls, data: dict[str, Any], base: Path | None = None) -> Settings:
        """Build settings from a parsed configuration mapping.

        Relative catalog paths are resolved against `base`, usually the
        directory of the settings file.
        """
        unknown = set(data) - {"catalog", "log_level"}
        if unknown:
            msg = f"unknown configuration keys: {sorted(unknown)}"
            raise ValueError(msg)

        catalog = data.get("catalog")
        if catalog is not None:
            catalog = Path(catalog)
            if base is not None and not catalog.is_absolute():
                catalog = base / catalog

        log_level = data.get("log_level", DEFAULT_LEVEL)
        if not isinstance(log_level, str):
            msg = f"log_level must be a string, got {log_level!r}"
            raise ValueError(msg)  # noqa: TRY004

        return cls(catalog=catalog, log_level=log_level.upper())


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from `path`, or from ``$VISKELL_CONFIG`` if set.

    Without either, the defaults are returned.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return Settings()
    config_path = Path(path)
    return Settings.from_mapping(load_config(config_path), base=config_path.parent)
