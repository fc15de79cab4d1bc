"""Rewrite text nodes of a marko document into GitHub reference links."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, List, Sequence

from marko import block, inline

from ..models import ReferenceMatch, RepositoryId
from .matcher import find_references

_CODE_TYPES = (block.CodeBlock, block.FencedCode, inline.CodeSpan)
_LINK_TYPES = (inline.Link, inline.Image, inline.AutoLink)


@dataclass(frozen=True)
class LinkPolicy:
    """Controls which parts of a document are scanned for references."""

    skip_links: bool = True


def link_references(
    document: Any,
    repository: RepositoryId,
    policy: LinkPolicy | None = None,
) -> int:
    """Replace references in every text node under ``document`` with links.

    Child lists that contain references are rebuilt; every other node keeps its
    identity. Returns the number of links created.
    """
    return _visit(document, repository, policy or LinkPolicy())


def _visit(element: Any, repository: RepositoryId, policy: LinkPolicy) -> int:
    children = getattr(element, "children", None)
    if not isinstance(children, list) or _is_skipped(element, policy):
        return 0

    created = 0
    split = False
    rebuilt: List[Any] = []
    for child in children:
        if isinstance(child, inline.RawText) and isinstance(child.children, str):
            matches = find_references(child.children, repository)
            if matches:
                rebuilt.extend(_split(child, matches))
                created += len(matches)
                split = True
                continue
        else:
            created += _visit(child, repository, policy)
        rebuilt.append(child)

    if split:
        element.children = rebuilt
    return created


def _is_skipped(element: Any, policy: LinkPolicy) -> bool:
    if isinstance(element, _CODE_TYPES):
        return True
    return policy.skip_links and isinstance(element, _LINK_TYPES)


def _split(node: inline.RawText, matches: Sequence[ReferenceMatch]) -> List[Any]:
    text = node.children
    pieces: List[Any] = []
    cursor = 0
    for match in matches:
        if match.start > cursor:
            pieces.append(_text_like(node, text[cursor : match.start]))
        pieces.append(_link(node, match))
        cursor = match.end
    if cursor < len(text):
        pieces.append(_text_like(node, text[cursor:]))
    return pieces


def _text_like(template: inline.RawText, value: str) -> inline.RawText:
    # Copy keeps renderer flags (e.g. escaping) of the source text node.
    node = copy.copy(template)
    node.children = value
    return node


def _link(template: inline.RawText, match: ReferenceMatch) -> inline.Link:
    # marko builds links from parser matches; set the attributes renderers read directly.
    link = inline.Link.__new__(inline.Link)
    link.dest = match.url
    link.title = None
    link.children = [_text_like(template, match.label)]
    return link


__all__ = ["LinkPolicy", "link_references"]
