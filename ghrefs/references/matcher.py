"""Detection of GitHub commit and issue references in plain text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Pattern, Sequence

from ..models import GITHUB_LOGIN, GITHUB_URL, ReferenceKind, ReferenceMatch, RepositoryId

SHA_LABEL_LENGTH = 7

_USER = rf"(?<![\w-])(?P<user>{GITHUB_LOGIN})"
_SHA = r"(?P<sha>[0-9a-f]{7,40})(?!\w)"
_NUMBER = r"(?P<number>[0-9]+)(?!\w)"


@dataclass(frozen=True)
class ReferenceRule:
    """One reference shape: the pattern to find and how to label and link it."""

    kind: ReferenceKind
    pattern: Pattern[str]
    build: Callable[["re.Match[str]", RepositoryId], tuple[str, str]]

    def scan(self, text: str, repository: RepositoryId) -> List[ReferenceMatch]:
        matches: List[ReferenceMatch] = []
        for found in self.pattern.finditer(text):
            label, url = self.build(found, repository)
            matches.append(
                ReferenceMatch(
                    kind=self.kind,
                    start=found.start(),
                    end=found.end(),
                    label=label,
                    url=url,
                )
            )
        return matches


def _commit_url(owner: str, project: str, sha: str) -> str:
    return f"{GITHUB_URL}/{owner}/{project}/commit/{sha}"


def _issue_url(owner: str, project: str, number: str) -> str:
    return f"{GITHUB_URL}/{owner}/{project}/issues/{number}"


def _user_sha(found: "re.Match[str]", repository: RepositoryId) -> tuple[str, str]:
    user, sha = found.group("user"), found.group("sha")
    return f"{user}@{sha[:SHA_LABEL_LENGTH]}", _commit_url(user, repository.project, sha)


def _sha(found: "re.Match[str]", repository: RepositoryId) -> tuple[str, str]:
    sha = found.group("sha")
    return sha[:SHA_LABEL_LENGTH], _commit_url(repository.owner, repository.project, sha)


def _user_issue(found: "re.Match[str]", repository: RepositoryId) -> tuple[str, str]:
    user, number = found.group("user"), found.group("number")
    return f"{user}#{number}", _issue_url(user, repository.project, number)


def _issue(found: "re.Match[str]", repository: RepositoryId) -> tuple[str, str]:
    return found.group(0), _issue_url(repository.owner, repository.project, found.group("number"))


DEFAULT_RULES: Sequence[ReferenceRule] = (
    ReferenceRule(ReferenceKind.USER_SHA, re.compile(rf"{_USER}@{_SHA}"), _user_sha),
    ReferenceRule(ReferenceKind.SHA, re.compile(rf"(?<![\w@]){_SHA}"), _sha),
    ReferenceRule(ReferenceKind.USER_ISSUE, re.compile(rf"{_USER}#{_NUMBER}"), _user_issue),
    ReferenceRule(ReferenceKind.GH_ISSUE, re.compile(rf"(?<!\w)GH-{_NUMBER}"), _issue),
    ReferenceRule(ReferenceKind.ISSUE, re.compile(rf"(?<!\w)#{_NUMBER}"), _issue),
)


def find_references(
    text: str,
    repository: RepositoryId,
    rules: Sequence[ReferenceRule] = DEFAULT_RULES,
) -> List[ReferenceMatch]:
    """Return non-overlapping references in ``text`` ordered by position.

    Candidates from every rule are considered left to right; at equal offsets the rule
    listed first wins, and a candidate overlapping an accepted span is dropped.
    """
    candidates = []
    for priority, rule in enumerate(rules):
        for match in rule.scan(text, repository):
            candidates.append((match.start, priority, match))
    candidates.sort(key=lambda item: (item[0], item[1]))

    accepted: List[ReferenceMatch] = []
    claimed_until = 0
    for start, _, match in candidates:
        if start < claimed_until:
            continue
        accepted.append(match)
        claimed_until = match.end
    return accepted


__all__ = ["DEFAULT_RULES", "ReferenceRule", "SHA_LABEL_LENGTH", "find_references"]
