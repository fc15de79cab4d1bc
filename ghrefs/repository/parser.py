"""Normalisation of the textual forms a GitHub repository can be written in."""

from __future__ import annotations

import re
from typing import List
from urllib.parse import urlparse

from ..models import GITHUB_LOGIN, RepositoryId

_SEGMENT = r"[A-Za-z0-9_.-]+"
_SEGMENT_PATTERN = re.compile(rf"^{_SEGMENT}$")
_OWNER_PATTERN = re.compile(rf"^{GITHUB_LOGIN}$")
_SHORTHAND_PATTERN = re.compile(
    rf"^(?:github:)?(?P<owner>{GITHUB_LOGIN})/(?P<project>{_SEGMENT})(?P<ref>[#@].*)?$"
)
_SCP_PATTERN = re.compile(
    rf"^(?:[\w.-]+@)?github\.com:(?P<owner>{GITHUB_LOGIN})/(?P<project>{_SEGMENT})/?(?P<ref>[#@].*)?$"
)

_URL_SCHEMES = {"http", "https", "git", "ssh", "git+http", "git+https", "git+ssh"}
_GITHUB_HOSTS = {"github.com", "www.github.com"}
_CODELOAD_HOST = "codeload.github.com"
_API_TAILS = {"tarball", "zipball"}
_LEGACY_TAILS = {"legacy.zip", "legacy.tar.gz"}
_CODELOAD_TAILS = {"tar.gz", "zip"}
_ARCHIVE_SUFFIXES = (".tar.gz", ".zip")


class InvalidRepositoryError(ValueError):
    """Raised when a repository string does not match any recognised shape."""


def parse_repository(value: str) -> RepositoryId:
    """Parse ``value`` into a :class:`RepositoryId`.

    Accepts ``owner/project`` shorthand (optionally with a ``#ref``/``@ref`` suffix,
    quoted or not), GitHub web, API and codeload URLs, ``git://`` URLs and the scp-like
    ``git@github.com:owner/project.git`` form. Refs and download tails are discarded.
    """
    if not isinstance(value, str):
        raise InvalidRepositoryError(f"Repository must be a string, got {type(value).__name__}")
    text = value.strip()
    if not text:
        raise InvalidRepositoryError("Repository is empty")

    if "://" not in text:
        match = _SHORTHAND_PATTERN.match(text) or _SCP_PATTERN.match(text)
        if match is None:
            raise _invalid(value)
        return _build(match.group("owner"), match.group("project"), value)

    return _parse_url(text, value)


def _parse_url(text: str, original: str) -> RepositoryId:
    parsed = urlparse(text)
    if parsed.scheme.lower() not in _URL_SCHEMES:
        raise _invalid(original)
    host = (parsed.hostname or "").lower()
    segments = [segment for segment in parsed.path.split("/") if segment]

    if host in _GITHUB_HOSTS:
        if segments[:1] == ["repos"]:
            segments = segments[1:]
            tail = segments[2:]
            if not tail or tail[0] not in _API_TAILS or len(tail) > 2:
                raise _invalid(original)
        elif not _is_web_tail(segments[2:]):
            raise _invalid(original)
    elif host == _CODELOAD_HOST:
        if not _is_codeload_tail(segments[2:]):
            raise _invalid(original)
    else:
        raise _invalid(original)

    if len(segments) < 2:
        raise _invalid(original)
    return _build(segments[0], segments[1], original)


def _is_web_tail(tail: List[str]) -> bool:
    if not tail:
        return True
    if tail[0] == "tree":
        return len(tail) >= 2
    if tail[0] == "archive":
        return len(tail) >= 2 and tail[-1].endswith(_ARCHIVE_SUFFIXES)
    return False


def _is_codeload_tail(tail: List[str]) -> bool:
    if not tail:
        return False
    if tail[0] in _LEGACY_TAILS:
        return len(tail) <= 2
    if tail[0] in _CODELOAD_TAILS:
        return len(tail) >= 2
    return False


def _build(owner: str, project: str, original: str) -> RepositoryId:
    # `@ref` survives URL parsing as part of the last path segment.
    project = re.split(r"[#@]", project, maxsplit=1)[0]
    if project.endswith(".git"):
        project = project[: -len(".git")]
    if not _OWNER_PATTERN.match(owner) or not _SEGMENT_PATTERN.match(project):
        raise _invalid(original)
    if project in {".", ".."}:
        raise _invalid(original)
    return RepositoryId(owner=owner, project=project)


def _invalid(value: str) -> InvalidRepositoryError:
    return InvalidRepositoryError(
        f"Invalid repository {value!r}: expected `owner/project` or a GitHub URL"
    )


__all__ = ["InvalidRepositoryError", "parse_repository"]
