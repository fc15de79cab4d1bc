"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ghrefs.cli import _build_parser, main
from ghrefs.logging import configure_logging
from tests._fixtures.project_builder import ProjectBuilder

SHA = "a5c3785ed8d6a35868bc169f07e40e889087fd2e"


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "link"])
    assert args.verbose is True
    assert args.command == "link"
    assert args.paths == [Path("README.md")]


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["repo", "--verbose"])
    assert args.verbose is True
    assert args.command == "repo"


def test_cli_rejects_write_with_check() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["link", "--write", "--check"])


def test_repo_command_prints_discovered_repository(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.package_json({"repository": "git://github.com/wooorm/mdast.git"})

    main(["repo", "--config", str(project_builder.path())])

    assert capsys.readouterr().out.strip() == "wooorm/mdast"


def test_repository_flag_overrides_config(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write({".ghrefs.yml": "repository: config/project\n"})

    main(["repo", "--config", str(project_builder.path()), "--repository", "flag/project"])

    assert capsys.readouterr().out.strip() == "flag/project"


def test_link_prints_linked_markdown(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write({".ghrefs.yml": "repository: wooorm/mdast\n", "README.md": f"Fixed in {SHA}.\n"})
    readme = project_builder.path("README.md")

    main(["link", str(readme), "--config", str(project_builder.path())])

    assert f"[a5c3785](https://github.com/wooorm/mdast/commit/{SHA})" in capsys.readouterr().out
    assert readme.read_text(encoding="utf-8") == f"Fixed in {SHA}.\n"


def test_link_write_updates_files(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write({"docs/CHANGES.md": "Closes GH-3.\n", "docs/plain.md": "Plain.\n"})

    main(["link", str(project_builder.path("docs")), "--repository", "wooorm/mdast", "--write"])

    assert "Updated 1 of 2 files" in capsys.readouterr().out
    changes = project_builder.path("docs/CHANGES.md").read_text(encoding="utf-8")
    assert "[GH-3](https://github.com/wooorm/mdast/issues/3)" in changes
    assert project_builder.path("docs/plain.md").read_text(encoding="utf-8") == "Plain.\n"


def test_link_check_exits_when_references_are_unlinked(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.write({"README.md": "See #4.\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["link", str(project_builder.path("README.md")), "-r", "wooorm/mdast", "--check"])

    assert excinfo.value.code == 1
    assert "1 unlinked references" in capsys.readouterr().out


def test_link_check_passes_for_linked_files(project_builder: ProjectBuilder) -> None:
    project_builder.write({"README.md": "See [#4](https://github.com/wooorm/mdast/issues/4).\n"})

    main(["link", str(project_builder.path("README.md")), "-r", "wooorm/mdast", "--check"])


def test_invalid_repository_exits_with_message(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["repo", "--config", str(project_builder.path()), "-r", "https://gitlab.com/a/b"])

    assert excinfo.value.code == 1
    assert "Invalid repository" in capsys.readouterr().err


def test_missing_file_exits_with_message(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["link", str(project_builder.path("missing.md")), "-r", "wooorm/mdast"])

    assert excinfo.value.code == 1
    assert "missing.md" in capsys.readouterr().err


def test_log_file_records_debug_output_without_verbose(
    project_builder: ProjectBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    project_builder.package_json({"repository": "git://github.com/wooorm/mdast.git"})
    log_file = project_builder.path("logs/ghrefs.log")

    try:
        main(["repo", "--config", str(project_builder.path()), "--log-file", str(log_file)])
    finally:
        configure_logging()

    captured = capsys.readouterr()
    assert captured.out.strip() == "wooorm/mdast"
    assert "Discovered repository" not in captured.err
    log_text = log_file.read_text(encoding="utf-8")
    assert "DEBUG ghrefs.resolver: Discovered repository wooorm/mdast" in log_text
