"""CLI entrypoints for ghrefs commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, GhRefsConfig, load_config
from .logging import configure_logging, get_logger
from .processor import DocumentProcessor, collect_markdown_files
from .references import LinkPolicy
from .repository import InvalidRepositoryError, MissingRepositoryError, resolve_repository


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_repository_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r",
        "--repository",
        help="Repository as `owner/project` or a GitHub URL (defaults to project metadata).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .ghrefs.yml or the directory holding it (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghrefs",
        description="Link GitHub commit and issue references in markdown documents.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    link_parser = subparsers.add_parser(
        "link",
        help="Rewrite references in markdown files into GitHub links.",
    )
    _add_verbose_option(link_parser, suppress_default=True)
    _add_repository_options(link_parser)
    link_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        default=[Path("README.md")],
        help="Markdown files or directories to process (defaults to README.md).",
    )
    mode = link_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--write",
        action="store_true",
        help="Rewrite files in place instead of printing the result.",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 when any file has unlinked references.",
    )
    link_parser.add_argument(
        "--include-links",
        action="store_true",
        help="Also scan the text of existing links.",
    )

    repo_parser = subparsers.add_parser(
        "repo",
        help="Print the repository references would be linked against.",
    )
    _add_verbose_option(repo_parser, suppress_default=True)
    _add_repository_options(repo_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ghrefs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        config = load_config(args.config)
        repository = resolve_repository(
            args.repository or config.repository, start=config.root
        )
    except (ConfigError, InvalidRepositoryError, MissingRepositoryError) as exc:
        parser.exit(1, f"ghrefs: {exc}\n")
    logger.debug("Linking against %s", repository)

    if args.command == "repo":
        print(repository.slug)
        return

    processor = DocumentProcessor(repository, policy=_policy(args, config))
    try:
        files = collect_markdown_files(args.paths)
        outcomes = [processor.link_file(path, write=bool(args.write)) for path in files]
    except (FileNotFoundError, UnicodeDecodeError) as exc:
        parser.exit(1, f"ghrefs: {exc}\n")

    if args.check:
        stale = [outcome for outcome in outcomes if outcome.changed]
        for outcome in stale:
            print(f"{_relativize(outcome.path)}: {outcome.references} unlinked references")
        if stale:
            parser.exit(1)
        return
    if args.write:
        updated = sum(1 for outcome in outcomes if outcome.changed)
        print(f"Updated {updated} of {len(outcomes)} files")
        return
    for outcome in outcomes:
        sys.stdout.write(outcome.content)


def _policy(args: argparse.Namespace, config: GhRefsConfig) -> LinkPolicy:
    if args.include_links:
        return LinkPolicy(skip_links=False)
    return LinkPolicy(skip_links=config.skip_links)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
