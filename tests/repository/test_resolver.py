"""Tests for ghrefs.repository.resolver."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import pytest

from ghrefs.models import RepositoryId
from ghrefs.repository import (
    InvalidRepositoryError,
    MetadataRecord,
    MissingRepositoryError,
    resolve_repository,
)
from tests._fixtures.project_builder import ProjectBuilder


class FakeReader:
    """Metadata reader double returning a canned record."""

    def __init__(self, record: Optional[MetadataRecord]) -> None:
        self.record = record
        self.starts: List[Path] = []

    def find_nearest(self, start: Path) -> Optional[MetadataRecord]:
        self.starts.append(start)
        return self.record


def _record(repository: Any) -> MetadataRecord:
    return MetadataRecord(path=Path("/project/package.json"), repository=repository)


def test_resolve_uses_repository_id_directly() -> None:
    repository = RepositoryId(owner="wooorm", project="mdast")
    reader = FakeReader(_record("other/project"))

    assert resolve_repository(repository, reader) is repository
    assert reader.starts == []


def test_resolve_accepts_owner_project_mapping() -> None:
    assert resolve_repository({"owner": "wooorm", "project": "mdast"}) == RepositoryId(
        owner="wooorm", project="mdast"
    )
    assert resolve_repository({"user": "wooorm", "project": "mdast"}) == RepositoryId(
        owner="wooorm", project="mdast"
    )


def test_resolve_rejects_incomplete_mapping() -> None:
    with pytest.raises(InvalidRepositoryError):
        resolve_repository({"owner": "wooorm"})


def test_resolve_parses_configured_string() -> None:
    reader = FakeReader(_record("other/project"))

    repository = resolve_repository("https://github.com/wooorm/mdast.git", reader)

    assert repository == RepositoryId(owner="wooorm", project="mdast")
    assert reader.starts == []


def test_resolve_propagates_invalid_configured_string() -> None:
    with pytest.raises(InvalidRepositoryError):
        resolve_repository("not a repository", FakeReader(None))


def test_resolve_rejects_unsupported_config_types() -> None:
    with pytest.raises(InvalidRepositoryError):
        resolve_repository(42, FakeReader(None))  # type: ignore[arg-type]


@pytest.mark.parametrize("config", [None, "", "   "])
def test_resolve_discovers_from_metadata(config: Optional[str]) -> None:
    reader = FakeReader(_record("test/mdast-github"))

    repository = resolve_repository(config, reader, start=Path("/project/docs"))

    assert repository == RepositoryId(owner="test", project="mdast-github")
    assert reader.starts == [Path("/project/docs")]


def test_resolve_reads_repository_url_object() -> None:
    reader = FakeReader(_record({"type": "git", "url": "https://github.com/wooorm/mdast.git"}))

    assert resolve_repository(None, reader) == RepositoryId(owner="wooorm", project="mdast")


def test_resolve_defaults_start_to_working_directory(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.chdir(tmp_path)
    reader = FakeReader(_record("wooorm/mdast"))

    resolve_repository(None, reader)

    assert reader.starts == [Path.cwd()]


def test_resolve_raises_missing_without_record() -> None:
    with pytest.raises(MissingRepositoryError, match="Missing `repository`"):
        resolve_repository(None, FakeReader(None))


@pytest.mark.parametrize("value", [None, "", {"type": "git"}, {"url": 3}, ["a/b"]])
def test_resolve_raises_missing_for_unusable_values(value: Any) -> None:
    with pytest.raises(MissingRepositoryError, match="Missing `repository`"):
        resolve_repository(None, FakeReader(_record(value)))


def test_resolve_propagates_invalid_discovered_string() -> None:
    with pytest.raises(InvalidRepositoryError):
        resolve_repository(None, FakeReader(_record("https://gitlab.com/a/b")))


def test_resolve_with_real_reader(project_builder: ProjectBuilder) -> None:
    project_builder.package_json({"repository": {"url": "git://github.com/wooorm/mdast.git"}})

    repository = resolve_repository(None, start=project_builder.path())

    assert repository == RepositoryId(owner="wooorm", project="mdast")
