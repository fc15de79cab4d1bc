"""Discovery of project metadata records carrying a `repository` value."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Protocol

from ..logging import get_logger

_URL_KEYS = ("repository", "source", "source code", "github", "homepage")


@dataclass(frozen=True)
class MetadataRecord:
    """A project metadata file and the raw `repository` value it declares."""

    path: Path
    repository: Any = None


class MetadataReader(Protocol):
    """Finds the project metadata record nearest to a starting directory."""

    def find_nearest(self, start: Path) -> Optional[MetadataRecord]:
        ...


class ProjectMetadataReader:
    """Searches upward for ``package.json`` or ``pyproject.toml`` files."""

    FILENAMES = ("package.json", "pyproject.toml")

    def __init__(self) -> None:
        self.logger = get_logger("metadata")
        self._loaders: Dict[str, Callable[[Path], Any]] = {
            "package.json": _load_package_json,
            "pyproject.toml": _load_pyproject,
        }

    def find_nearest(self, start: Path) -> Optional[MetadataRecord]:
        for directory in _walk_up(start):
            for filename in self.FILENAMES:
                candidate = directory / filename
                if not candidate.is_file():
                    continue
                try:
                    repository = self._loaders[filename](candidate)
                except (OSError, UnicodeDecodeError, ValueError) as exc:
                    self.logger.debug("Ignoring unreadable metadata %s: %s", candidate, exc)
                    continue
                self.logger.debug("Using project metadata from %s", candidate)
                return MetadataRecord(path=candidate, repository=repository)
        return None


def _walk_up(start: Path) -> Iterator[Path]:
    directory = start.expanduser().resolve()
    if directory.is_file():
        directory = directory.parent
    yield directory
    yield from directory.parents


def _load_package_json(path: Path) -> Any:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("package.json must contain an object at the root")
    return data.get("repository")


def _load_pyproject(path: Path) -> Optional[str]:
    # tomllib.TOMLDecodeError is a ValueError subclass.
    data = tomllib.loads(path.read_text(encoding="utf-8"))

    project = data.get("project")
    urls = project.get("urls") if isinstance(project, dict) else None
    if isinstance(urls, dict):
        by_key = {str(key).strip().lower(): value for key, value in urls.items()}
        for key in _URL_KEYS:
            value = by_key.get(key)
            if isinstance(value, str) and "github.com" in value:
                return value

    tool = data.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    if isinstance(poetry, dict) and isinstance(poetry.get("repository"), str):
        return poetry["repository"]
    return None


__all__ = ["MetadataReader", "MetadataRecord", "ProjectMetadataReader"]
