"""Changelog rules for the Keep a Changelog format.

Headings inside fenced code blocks are ignored.

Violations:
- changelog-title: first non-blank line is not `# Changelog`
- changelog-unreleased: no `## [Unreleased]` section
- changelog-version-heading: release heading is not `## [X.Y.Z] - YYYY-MM-DD`
- changelog-change-type: `###` heading is not a known change type
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from style_guard.rules import Rule
from style_guard.rules.markdown import in_code_block

CHANGE_TYPES = ("Added", "Changed", "Deprecated", "Removed", "Fixed", "Security")

_TITLE = "# Changelog"
_UNRELEASED = re.compile(r"^## \[Unreleased\]\s*$")
_RELEASE = re.compile(
    r"^## \[\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?\] - \d{4}-\d{2}-\d{2}(?: \[YANKED\])?\s*$"
)


def _first_content_index(lines: Sequence[str]) -> int | None:
    for i, line in enumerate(lines):
        if line.strip() != "":
            return i
    return None


def _bad_title(lines: Sequence[str], idx: int) -> bool:
    if _first_content_index(lines) != idx:
        return False
    return lines[idx].strip() != _TITLE


def _no_unreleased(lines: Sequence[str], idx: int) -> bool:
    if idx != 0:
        return False
    return not any(
        _UNRELEASED.match(line) is not None and not in_code_block(lines, i)
        for i, line in enumerate(lines)
    )


def _bad_version_heading(lines: Sequence[str], idx: int) -> bool:
    line = lines[idx]
    if not line.startswith("## ") or in_code_block(lines, idx):
        return False
    return _UNRELEASED.match(line) is None and _RELEASE.match(line) is None


def _bad_change_type(lines: Sequence[str], idx: int) -> bool:
    line = lines[idx]
    if not line.startswith("### ") or in_code_block(lines, idx):
        return False
    return line[4:].strip() not in CHANGE_TYPES


RULES: tuple[Rule, ...] = (
    Rule(
        id="changelog-title",
        target="changelog",
        convention="Open the changelog with a `# Changelog` title.",
        detect=_bad_title,
    ),
    Rule(
        id="changelog-unreleased",
        target="changelog",
        convention="Keep an `## [Unreleased]` section at the top for upcoming changes.",
        detect=_no_unreleased,
    ),
    Rule(
        id="changelog-version-heading",
        target="changelog",
        convention="Title releases `## [X.Y.Z] - YYYY-MM-DD`.",
        detect=_bad_version_heading,
    ),
    Rule(
        id="changelog-change-type",
        target="changelog",
        convention="Group changes under " + ", ".join(CHANGE_TYPES) + ".",
        detect=_bad_change_type,
    ),
)


__all__ = ["CHANGE_TYPES", "RULES"]
