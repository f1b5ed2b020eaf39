"""Rust source rules.

Violations:
- rust-unsafe-safety-comment: `unsafe { ... }` block without a `// SAFETY:` comment
- rust-unsafe-fn-safety-doc: `unsafe fn` without a `# Safety` doc section
- rust-no-dbg: leftover `dbg!` macro
- rust-no-todo: `todo!` or `unimplemented!` placeholder
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from itertools import takewhile

from style_guard.rules import Rule
from style_guard.rules.util import previous_lines, strip_comment

_UNSAFE_BLOCK = re.compile(r"\bunsafe\s*\{")
_UNSAFE_FN = re.compile(r"\bunsafe\s+(?:extern\s+\"[^\"]*\"\s+)?fn\b")
_SAFETY_COMMENT = re.compile(r"//\s*SAFETY:")
_SAFETY_DOC = re.compile(r"^\s*//[/!]\s*#\s*Safety\b")
_DBG = re.compile(r"\bdbg!\s*\(")
_TODO = re.compile(r"\b(?:todo|unimplemented)!\s*\(")
_CHAR_LITERAL = re.compile(r"'(?:\\.|[^\\'])'")


def _code(line: str) -> str:
    # Char literals are blanked so `'"'` does not open a string; lifetimes
    # never close with `'` and are left alone.
    return strip_comment(_CHAR_LITERAL.sub("' '", line), "//", quotes='"')


def _is_preamble(line: str) -> bool:
    """Comment or attribute lines that belong to the item below them."""
    stripped = line.strip()
    return stripped.startswith("//") or stripped.startswith("#[")


def _preamble(lines: Sequence[str], idx: int) -> Iterator[str]:
    return takewhile(_is_preamble, previous_lines(lines, idx))


def _unsafe_block_without_safety(lines: Sequence[str], idx: int) -> bool:
    line = lines[idx]
    if _UNSAFE_BLOCK.search(_code(line)) is None:
        return False
    if _SAFETY_COMMENT.search(line) is not None:
        return False
    return not any(_SAFETY_COMMENT.search(p) is not None for p in _preamble(lines, idx))


def _unsafe_fn_without_doc(lines: Sequence[str], idx: int) -> bool:
    if _UNSAFE_FN.search(_code(lines[idx])) is None:
        return False
    return not any(_SAFETY_DOC.match(p) is not None for p in _preamble(lines, idx))


def _dbg_macro(lines: Sequence[str], idx: int) -> bool:
    return _DBG.search(_code(lines[idx])) is not None


def _todo_macro(lines: Sequence[str], idx: int) -> bool:
    return _TODO.search(_code(lines[idx])) is not None


RULES: tuple[Rule, ...] = (
    Rule(
        id="rust-unsafe-safety-comment",
        target="rust",
        convention="Precede every `unsafe` block with a `// SAFETY:` comment.",
        detect=_unsafe_block_without_safety,
    ),
    Rule(
        id="rust-unsafe-fn-safety-doc",
        target="rust",
        convention="Document the caller's obligations of an `unsafe fn` in a `# Safety` section.",
        detect=_unsafe_fn_without_doc,
    ),
    Rule(
        id="rust-no-dbg",
        target="rust",
        convention="Do not commit `dbg!` calls.",
        detect=_dbg_macro,
    ),
    Rule(
        id="rust-no-todo",
        target="rust",
        convention="Do not commit `todo!` or `unimplemented!` placeholders.",
        detect=_todo_macro,
    ),
)


__all__ = ["RULES"]
