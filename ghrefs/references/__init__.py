"""Reference detection and document rewriting."""

from .matcher import DEFAULT_RULES, ReferenceRule, find_references
from .rewriter import LinkPolicy, link_references

__all__ = [
    "DEFAULT_RULES",
    "LinkPolicy",
    "ReferenceRule",
    "find_references",
    "link_references",
]
