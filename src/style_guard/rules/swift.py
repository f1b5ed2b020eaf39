"""Swift source rules.

Violations:
- swift-no-force-try: `try!`
- swift-no-force-cast: `as!`
- swift-no-semicolons: statement terminated with `;`
- swift-mark-format: MARK comment not written as `// MARK: ...`
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from style_guard.rules import Rule
from style_guard.rules.util import strip_comment

_FORCE_TRY = re.compile(r"\btry!")
_FORCE_CAST = re.compile(r"\bas!")
_ANY_MARK = re.compile(r"^\s*//\s*mark\s*[:-]", re.IGNORECASE)
_GOOD_MARK = re.compile(r"^\s*// MARK: \S")


def _code(line: str) -> str:
    return strip_comment(line, "//", quotes='"')


def _force_try(lines: Sequence[str], idx: int) -> bool:
    return _FORCE_TRY.search(_code(lines[idx])) is not None


def _force_cast(lines: Sequence[str], idx: int) -> bool:
    return _FORCE_CAST.search(_code(lines[idx])) is not None


def _trailing_semicolon(lines: Sequence[str], idx: int) -> bool:
    return _code(lines[idx]).rstrip().endswith(";")


def _bad_mark(lines: Sequence[str], idx: int) -> bool:
    line = lines[idx]
    return _ANY_MARK.match(line) is not None and _GOOD_MARK.match(line) is None


RULES: tuple[Rule, ...] = (
    Rule(
        id="swift-no-force-try",
        target="swift",
        convention="Avoid `try!`; handle or propagate the error.",
        detect=_force_try,
    ),
    Rule(
        id="swift-no-force-cast",
        target="swift",
        convention="Avoid `as!`; use `as?` and handle the failure.",
        detect=_force_cast,
    ),
    Rule(
        id="swift-no-semicolons",
        target="swift",
        convention="Do not terminate statements with semicolons.",
        detect=_trailing_semicolon,
    ),
    Rule(
        id="swift-mark-format",
        target="swift",
        convention="Write section markers as `// MARK: - Name`.",
        detect=_bad_mark,
    ),
)


__all__ = ["RULES"]
