"""Configuration loading for ghrefs (.ghrefs.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .repository import RepositoryConfig

CONFIG_FILENAME = ".ghrefs.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GhRefsConfig:
    """Represents the settings defined in .ghrefs.yml."""

    root: Path
    repository: RepositoryConfig = None
    skip_links: bool = True


def load_config(config_path: Path) -> GhRefsConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GhRefsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    repository = data.get("repository")
    if repository is not None and not isinstance(repository, (str, dict)):
        raise ConfigError("`repository` must be a string or a mapping")

    links = _as_dict(data.get("links"))
    skip_links = _as_bool(links.get("skip_existing"))

    return GhRefsConfig(
        root=root,
        repository=repository,
        skip_links=True if skip_links is None else skip_links,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "GhRefsConfig", "load_config"]
