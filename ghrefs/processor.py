"""Processing runs: resolve the repository once, then link markdown documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import marko
from marko.md_renderer import MarkdownRenderer

from .logging import get_logger
from .models import RepositoryId
from .references import LinkPolicy, link_references
from .repository import MetadataReader, RepositoryConfig, resolve_repository

MARKDOWN_SUFFIXES = {".md", ".markdown"}
_IGNORED_DIRECTORIES = {"node_modules"}


@dataclass
class LinkOutcome:
    """Result of linking a single markdown file."""

    path: Path
    changed: bool
    content: str
    references: int


class DocumentProcessor:
    """Links GitHub references in markdown documents for one repository."""

    def __init__(
        self,
        repository: RepositoryId,
        *,
        policy: LinkPolicy | None = None,
        markdown: marko.Markdown | None = None,
    ) -> None:
        self.repository = repository
        self.policy = policy or LinkPolicy()
        self.markdown = markdown or marko.Markdown(renderer=MarkdownRenderer)
        self.logger = get_logger("processor")

    @classmethod
    def from_config(
        cls,
        repository: RepositoryConfig,
        *,
        reader: Optional[MetadataReader] = None,
        start: Optional[Path] = None,
        policy: LinkPolicy | None = None,
    ) -> "DocumentProcessor":
        """Resolve the repository for this run and build a processor for it."""
        resolved = resolve_repository(repository, reader, start=start)
        return cls(resolved, policy=policy)

    def link_text(self, text: str) -> str:
        """Return ``text`` with references linked; unchanged text is returned as-is."""
        content, _ = self._link(text)
        return content

    def link_file(self, path: Path, *, write: bool = False) -> LinkOutcome:
        """Link references in a markdown file, optionally writing the result back."""
        original = path.read_text(encoding="utf-8")
        content, count = self._link(original)
        changed = content != original
        self.logger.debug("Linked %d references in %s", count, path)
        if write and changed:
            path.write_text(content, encoding="utf-8")
            self.logger.info("Updated %s (%d references)", path, count)
        return LinkOutcome(path=path, changed=changed, content=content, references=count)

    def _link(self, text: str) -> Tuple[str, int]:
        document = self.markdown.parse(text)
        count = link_references(document, self.repository, self.policy)
        if not count:
            return text, 0
        return self.markdown.render(document), count


def collect_markdown_files(paths: Iterable[Path]) -> List[Path]:
    """Expand directories into the markdown files they contain.

    Hidden directories and ``node_modules`` are not searched. Explicit file paths are
    kept whatever their suffix; missing paths raise ``FileNotFoundError``.
    """
    files: List[Path] = []
    for path in paths:
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            for candidate in sorted(path.rglob("*")):
                relative_parts = candidate.relative_to(path).parts[:-1]
                if any(part.startswith(".") or part in _IGNORED_DIRECTORIES for part in relative_parts):
                    continue
                if candidate.is_file() and candidate.suffix.lower() in MARKDOWN_SUFFIXES:
                    files.append(candidate)
        else:
            raise FileNotFoundError(f"No such file or directory: {path}")
    return files


__all__ = ["DocumentProcessor", "LinkOutcome", "MARKDOWN_SUFFIXES", "collect_markdown_files"]
