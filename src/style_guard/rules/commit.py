"""Commit message rules.

Git strips ``#`` comment lines and leading blank lines before storing a
message, so the subject is the first line that is neither. Every rule here
ignores comment lines.

Violations:
- commit-subject-present: the message has no subject line
- commit-subject-capitalized: subject starts with a lowercase letter or symbol
- commit-subject-length: subject is longer than 72 characters
- commit-subject-no-period: subject ends with a period
- commit-subject-imperative: subject starts with "Added", "Fixing", ...
- commit-blank-line-after-subject: body starts right under the subject
- commit-body-line-length: body line is longer than 72 characters
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from style_guard.rules import Rule

MAX_SUBJECT_LENGTH = 72
MAX_BODY_LINE_LENGTH = 72

# -ed/-ing words that are fine as the first word of a subject.
_IMPERATIVE_EXCEPTIONS = frozenset(
    {
        "bring",
        "embed",
        "exceed",
        "feed",
        "need",
        "proceed",
        "ring",
        "seed",
        "shed",
        "speed",
        "string",
    }
)
_FIRST_WORD = re.compile(r"^([A-Za-z]+)\b")
_URL = re.compile(r"\w+://")


def _is_comment(line: str) -> bool:
    return line.startswith("#")


def _subject_index(lines: Sequence[str]) -> int | None:
    for i, line in enumerate(lines):
        if line.strip() != "" and not _is_comment(line):
            return i
    return None


def _subject(lines: Sequence[str], idx: int) -> str | None:
    """Return the subject when ``idx`` points at it."""
    if _subject_index(lines) != idx:
        return None
    return lines[idx].strip()


def _subject_missing(lines: Sequence[str], idx: int) -> bool:
    return idx == 0 and _subject_index(lines) is None


def _subject_not_capitalized(lines: Sequence[str], idx: int) -> bool:
    subject = _subject(lines, idx)
    if subject is None:
        return False
    return not subject[0].isupper()


def _subject_too_long(lines: Sequence[str], idx: int) -> bool:
    subject = _subject(lines, idx)
    return subject is not None and len(subject) > MAX_SUBJECT_LENGTH


def _subject_ends_with_period(lines: Sequence[str], idx: int) -> bool:
    subject = _subject(lines, idx)
    if subject is None:
        return False
    return subject.endswith(".") and not subject.endswith("...")


def _subject_not_imperative(lines: Sequence[str], idx: int) -> bool:
    subject = _subject(lines, idx)
    if subject is None:
        return False
    match = _FIRST_WORD.match(subject)
    if match is None:
        return False
    word = match.group(1).lower()
    if word in _IMPERATIVE_EXCEPTIONS:
        return False
    past = word.endswith("ed") and len(word) > 3
    gerund = word.endswith("ing") and len(word) > 4
    return past or gerund


def _missing_blank_after_subject(lines: Sequence[str], idx: int) -> bool:
    if idx == 0 or _subject_index(lines) != idx - 1:
        return False
    line = lines[idx]
    return line.strip() != "" and not _is_comment(line)


def _body_line_too_long(lines: Sequence[str], idx: int) -> bool:
    subject_idx = _subject_index(lines)
    if subject_idx is None or idx <= subject_idx:
        return False
    line = lines[idx]
    if _is_comment(line) or _URL.search(line) is not None:
        return False
    return len(line.rstrip()) > MAX_BODY_LINE_LENGTH


RULES: tuple[Rule, ...] = (
    Rule(
        id="commit-subject-present",
        target="commit",
        convention="A commit message starts with a non-empty subject line.",
        detect=_subject_missing,
    ),
    Rule(
        id="commit-subject-capitalized",
        target="commit",
        convention="Capitalize the subject line.",
        detect=_subject_not_capitalized,
    ),
    Rule(
        id="commit-subject-length",
        target="commit",
        convention=f"Keep the subject line to {MAX_SUBJECT_LENGTH} characters or fewer.",
        detect=_subject_too_long,
    ),
    Rule(
        id="commit-subject-no-period",
        target="commit",
        convention="Do not end the subject line with a period.",
        detect=_subject_ends_with_period,
    ),
    Rule(
        id="commit-subject-imperative",
        target="commit",
        convention='Use the imperative mood in the subject line ("Add", not "Added").',
        detect=_subject_not_imperative,
    ),
    Rule(
        id="commit-blank-line-after-subject",
        target="commit",
        convention="Separate the subject from the body with a blank line.",
        detect=_missing_blank_after_subject,
    ),
    Rule(
        id="commit-body-line-length",
        target="commit",
        convention=f"Wrap the body at {MAX_BODY_LINE_LENGTH} characters.",
        detect=_body_line_too_long,
    ),
)


__all__ = ["MAX_BODY_LINE_LENGTH", "MAX_SUBJECT_LENGTH", "RULES"]
