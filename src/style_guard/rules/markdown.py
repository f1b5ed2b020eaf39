"""Markdown document rules.

Violations:
- md-fence-language: opening code fence without a language tag
- md-anchor-exists: `[text](#anchor)` link to a heading that does not exist
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import NamedTuple

from style_guard.rules import Rule
from style_guard.rules.util import per_document

_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")
_HEADING = re.compile(r"^ {0,3}#{1,6}\s+(.*?)(?:\s+#+)?\s*$")
_SETEXT_UNDERLINE = re.compile(r"^ {0,3}(?:=+|-+)\s*$")
_HTML_ANCHOR = re.compile(r"<a\s+[^>]*(?:name|id)=\"([^\"]+)\"")
_CODE_SPAN = re.compile(r"`[^`]*`")
_ANCHOR_LINK = re.compile(r"\]\(#([^)\s]+)\)")
_SLUG_DROP = re.compile(r"[^\w\- ]")
_INLINE_MARKUP = re.compile(r"[*`]|\[([^\]]*)\]\([^)]*\)")


class FenceMap(NamedTuple):
    """Where the fenced code blocks of a document are."""

    openings: dict[int, str]
    inside: frozenset[int]


@per_document
def fence_map(lines: tuple[str, ...]) -> FenceMap:
    """Return the fenced code blocks of ``lines``."""
    openings: dict[int, str] = {}
    inside: set[int] = set()
    opener: tuple[str, int] | None = None
    for i, line in enumerate(lines):
        match = _FENCE.match(line)
        if opener is None:
            if match is None:
                continue
            fence, info = match.group(1), match.group(2).strip()
            if fence[0] == "`" and "`" in info:
                continue
            opener = (fence[0], len(fence))
            openings[i] = info
            inside.add(i)
            continue
        inside.add(i)
        if (
            match is not None
            and match.group(1)[0] == opener[0]
            and len(match.group(1)) >= opener[1]
            and match.group(2).strip() == ""
        ):
            opener = None
    return FenceMap(openings=openings, inside=frozenset(inside))


def in_code_block(lines: Sequence[str], idx: int) -> bool:
    """True when ``lines[idx]`` is a fence line or inside a fenced block."""
    return idx in fence_map(lines).inside


def slugify(heading: str) -> str:
    """Return the GitHub anchor for a heading text."""
    text = _INLINE_MARKUP.sub(lambda m: m.group(1) or "", heading)
    text = _SLUG_DROP.sub("", text.strip().lower())
    return text.replace(" ", "-")


def _is_setext_text(lines: tuple[str, ...], i: int, inside: frozenset[int]) -> bool:
    """Text line of a heading underlined with `===` or `---`."""
    nxt = i + 1
    if nxt >= len(lines) or nxt in inside or not lines[i].strip():
        return False
    if _SETEXT_UNDERLINE.match(lines[i]) is not None:
        return False
    return _SETEXT_UNDERLINE.match(lines[nxt]) is not None


@per_document
def _anchors(lines: tuple[str, ...]) -> frozenset[str]:
    inside = fence_map(lines).inside
    seen: dict[str, int] = {}
    out: set[str] = set()
    for i, line in enumerate(lines):
        if i in inside:
            continue
        out.update(_HTML_ANCHOR.findall(line))
        match = _HEADING.match(line)
        if match is not None:
            text = match.group(1)
        elif _is_setext_text(lines, i, inside):
            text = line
        else:
            continue
        slug = slugify(text)
        count = seen.get(slug, 0)
        seen[slug] = count + 1
        out.add(slug if count == 0 else f"{slug}-{count}")
    return frozenset(out)


def _fence_without_language(lines: Sequence[str], idx: int) -> bool:
    openings = fence_map(lines).openings
    return idx in openings and openings[idx] == ""


def _dangling_anchor(lines: Sequence[str], idx: int) -> bool:
    if in_code_block(lines, idx):
        return False
    links = _ANCHOR_LINK.findall(_CODE_SPAN.sub("", lines[idx]))
    if not links:
        return False
    anchors = _anchors(lines)
    return any(link not in anchors and link.lower() not in anchors for link in links)


RULES: tuple[Rule, ...] = (
    Rule(
        id="md-fence-language",
        target="markdown",
        convention="Tag every fenced code example with its language.",
        detect=_fence_without_language,
    ),
    Rule(
        id="md-anchor-exists",
        target="markdown",
        convention="In-document links point at a heading that exists.",
        detect=_dangling_anchor,
    ),
)


__all__ = ["RULES", "FenceMap", "fence_map", "in_code_block", "slugify"]
