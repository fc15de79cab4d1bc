"""Core data models shared across ghrefs components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GITHUB_URL = "https://github.com"

# GitHub login: alphanumerics with single inner hyphens, at most 39 characters.
GITHUB_LOGIN = r"[A-Za-z0-9](?:-?[A-Za-z0-9]){0,38}"


@dataclass(frozen=True)
class RepositoryId:
    """Canonical ``owner/project`` pair identifying a GitHub repository."""

    owner: str
    project: str

    def __post_init__(self) -> None:
        for field_name in ("owner", "project"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value or "/" in value:
                raise ValueError(f"Invalid repository {field_name}: {value!r}")

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.project}"

    @property
    def url(self) -> str:
        return f"{GITHUB_URL}/{self.owner}/{self.project}"

    def __str__(self) -> str:
        return self.slug


class ReferenceKind(Enum):
    """Kinds of GitHub references recognised in text, in matching priority order."""

    USER_SHA = "user-sha"
    SHA = "sha"
    USER_ISSUE = "user-issue"
    GH_ISSUE = "gh-issue"
    ISSUE = "issue"


@dataclass(frozen=True)
class ReferenceMatch:
    """A reference found in a text value, spanning ``text[start:end]``."""

    kind: ReferenceKind
    start: int
    end: int
    label: str
    url: str


__all__ = ["GITHUB_LOGIN", "GITHUB_URL", "ReferenceKind", "ReferenceMatch", "RepositoryId"]
