"""Resolve which repository a processing run links against."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from ..logging import get_logger
from ..models import RepositoryId
from .metadata import MetadataReader, ProjectMetadataReader
from .parser import InvalidRepositoryError, parse_repository

RepositoryConfig = Union[None, str, RepositoryId, Mapping[str, Any]]

MISSING_REPOSITORY_MESSAGE = "Missing `repository`"

_logger = get_logger("resolver")


class MissingRepositoryError(LookupError):
    """Raised when no repository can be determined by any resolution path."""

    def __init__(self, message: str = MISSING_REPOSITORY_MESSAGE) -> None:
        super().__init__(message)


def resolve_repository(
    config: RepositoryConfig,
    reader: Optional[MetadataReader] = None,
    *,
    start: Optional[Path] = None,
) -> RepositoryId:
    """Return the repository for a run.

    Explicit configuration wins; otherwise the nearest project metadata record found
    from ``start`` (the working directory by default) supplies the `repository` value.
    """
    if isinstance(config, RepositoryId):
        return config
    if isinstance(config, Mapping):
        return _from_mapping(config)
    if isinstance(config, str) and config.strip():
        repository = parse_repository(config)
        _logger.debug("Using configured repository %s", repository)
        return repository
    if config is not None and not isinstance(config, str):
        raise InvalidRepositoryError(
            f"Unsupported repository configuration of type {type(config).__name__}"
        )

    reader = reader or ProjectMetadataReader()
    record = reader.find_nearest(start or Path.cwd())
    if record is None:
        raise MissingRepositoryError()

    value = record.repository
    if isinstance(value, Mapping):
        value = value.get("url")
    if not isinstance(value, str) or not value.strip():
        raise MissingRepositoryError()

    repository = parse_repository(value)
    _logger.debug("Discovered repository %s from %s", repository, record.path)
    return repository


def _from_mapping(config: Mapping[str, Any]) -> RepositoryId:
    owner = config.get("owner") or config.get("user")
    project = config.get("project")
    if owner is None and project is None and isinstance(config.get("url"), str):
        return parse_repository(config["url"])
    try:
        return RepositoryId(owner=owner, project=project)  # type: ignore[arg-type]
    except ValueError as exc:
        raise InvalidRepositoryError(str(exc)) from exc


__all__ = [
    "MISSING_REPOSITORY_MESSAGE",
    "MissingRepositoryError",
    "RepositoryConfig",
    "resolve_repository",
]
