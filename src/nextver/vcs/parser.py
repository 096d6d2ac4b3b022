"""Turn raw commit messages into commit records.

The header is matched against the configured conventional header pattern.
``BREAKING CHANGE:`` style footers become notes, as does a ``type!:``
header when the message has no such footer. Reverts are detected so that
a revert and the commit it undoes can cancel each other out.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from nextver.core.commits import CommitRecord, Note, Reference

if TYPE_CHECKING:
    from nextver.config.models import CommitsConfig

BREAKING_NOTE_TITLE = "BREAKING CHANGE"
REFERENCE_ACTIONS = (
    "close",
    "closes",
    "closed",
    "fix",
    "fixes",
    "fixed",
    "resolve",
    "resolves",
    "resolved",
)

_MENTION_RE = re.compile(r"(?<![\w@])@([\w-]+)")
_NAMED_CAPTURES = ("type", "scope", "subject")


def parse_commit_message(
    message: str,
    config: CommitsConfig,
    sha: str | None = None,
) -> CommitRecord:
    """Parse a commit message.

    Args:
        message: Full commit message
        config: Header, note and revert patterns
        sha: Commit hash, kept on the record for revert matching

    Returns:
        Parsed record; a message that is not conventional yields a record
        with no ``type``
    """
    lines = message.strip().splitlines()
    if not lines:
        return CommitRecord(hash=sha)

    header = lines[0].strip()
    rest = lines[1:]

    captures = _match_header(header, config)
    notes, body, footer = _split_body(rest, config.note_keywords)

    breaking_re = config.breaking_header_regex
    breaking = breaking_re.match(header) if breaking_re is not None else None
    if breaking:
        captures = captures or _correspond(breaking, config.header_correspondence)
        if not notes:
            notes = [Note(title=BREAKING_NOTE_TITLE, text=breaking.groups()[-1] or "")]

    named = {name: captures.pop(name, None) for name in _NAMED_CAPTURES}

    return CommitRecord(
        type=named["type"],
        scope=named["scope"],
        subject=named["subject"],
        revert=_match_revert(message, config),
        header=header,
        body=body,
        footer=footer,
        notes=tuple(notes),
        mentions=tuple(_MENTION_RE.findall(message)),
        references=tuple(_find_references(message, config.issue_prefixes)),
        hash=sha,
        fields=captures,
    )


def _correspond(match: re.Match[str], names: Sequence[str]) -> dict[str, str | None]:
    return dict(zip(names, match.groups(), strict=False))


def _match_header(header: str, config: CommitsConfig) -> dict[str, str | None]:
    match = config.header_regex.match(header)
    if not match:
        return {}
    return _correspond(match, config.header_correspondence)


def _match_revert(message: str, config: CommitsConfig) -> dict[str, str | None] | None:
    match = config.revert_regex.search(message)
    if not match:
        return None
    return _correspond(match, config.revert_correspondence)


def _split_body(
    lines: Sequence[str],
    keywords: Sequence[str],
) -> tuple[list[Note], str | None, str | None]:
    """Split the lines after the header into notes, body and footer.

    The footer starts at the first line opening with a note keyword;
    each note runs until the next keyword line.
    """
    note_re = re.compile(
        r"^[\s*|]*(" + "|".join(re.escape(k) for k in keywords) + r")[:\s]+(.*)$"
    )

    body_lines: list[str] = []
    footer_lines: list[str] = []
    notes: list[tuple[str, list[str]]] = []

    for line in lines:
        match = note_re.match(line)
        if match:
            notes.append((match.group(1), [match.group(2)]))
            footer_lines.append(line)
        elif notes:
            notes[-1][1].append(line)
            footer_lines.append(line)
        else:
            body_lines.append(line)

    return (
        [Note(title=title, text="\n".join(text).strip()) for title, text in notes],
        "\n".join(body_lines).strip() or None,
        "\n".join(footer_lines).strip() or None,
    )


def _find_references(message: str, prefixes: Sequence[str]) -> list[Reference]:
    if not prefixes:
        return []

    pattern = re.compile(
        r"(?:\b(?P<action>" + "|".join(REFERENCE_ACTIONS) + r")\s+)?"
        r"(?P<raw>(?:(?P<owner>[\w.-]+)/(?P<repository>[\w.-]+))?"
        r"(?P<prefix>" + "|".join(re.escape(p) for p in prefixes) + r")"
        r"(?P<issue>\d+))\b",
        re.IGNORECASE,
    )

    references = []
    for match in pattern.finditer(message):
        references.append(
            Reference(
                raw=match.group("raw"),
                issue=match.group("issue"),
                action=match.group("action"),
                owner=match.group("owner"),
                repository=match.group("repository"),
                prefix=match.group("prefix"),
            )
        )
    return references


def filter_reverted_commits(commits: Sequence[CommitRecord]) -> list[CommitRecord]:
    """Drop reverted commits together with the reverts that undo them.

    A revert whose target is outside ``commits`` is kept.

    Args:
        commits: Parsed commits of one release range

    Returns:
        Remaining commits, in their original order
    """
    dropped: set[int] = set()

    for i, revert_commit in enumerate(commits):
        if not revert_commit.revert or i in dropped:
            continue
        for j, target in enumerate(commits):
            if j != i and j not in dropped and _is_reverted_by(target, revert_commit.revert):
                dropped.update((i, j))
                break

    return [c for i, c in enumerate(commits) if i not in dropped]


def _is_reverted_by(commit: CommitRecord, revert: Mapping[str, str | None]) -> bool:
    matched = False
    for key, value in revert.items():
        if value is None:
            continue
        if key == "hash":
            if not commit.hash or not commit.hash.startswith(value):
                return False
        elif key == "header":
            if commit.header != value:
                return False
        elif commit.get(key) != value:
            return False
        matched = True
    return matched
