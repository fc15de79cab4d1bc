"""Repository identification: parsing, metadata discovery and resolution."""

from .metadata import MetadataReader, MetadataRecord, ProjectMetadataReader
from .parser import InvalidRepositoryError, parse_repository
from .resolver import (
    MISSING_REPOSITORY_MESSAGE,
    MissingRepositoryError,
    RepositoryConfig,
    resolve_repository,
)

__all__ = [
    "InvalidRepositoryError",
    "MISSING_REPOSITORY_MESSAGE",
    "MetadataReader",
    "MetadataRecord",
    "MissingRepositoryError",
    "ProjectMetadataReader",
    "RepositoryConfig",
    "parse_repository",
    "resolve_repository",
]
