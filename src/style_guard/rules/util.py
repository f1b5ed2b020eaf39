"""Utility functions for guard rules."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import TypeVar

_T = TypeVar("_T")


def read_lines(path: Path) -> list[str]:
    """Read file contents as a list of lines.

    Uses utf-8-sig to handle optional BOM.
    """
    try:
        text = path.read_text(encoding="utf-8-sig", errors="strict")
    except (OSError, UnicodeDecodeError) as exc:
        raise RuntimeError(f"failed to read {path}: {exc}") from exc
    return text.splitlines()


def strip_comment(line: str, marker: str, quotes: str = "\"'") -> str:
    """Return the code part of ``line`` with a trailing comment removed.

    ``marker`` inside a quoted string does not start a comment. A ``#``
    marker only counts at the start of a word, so ``$#`` and ``${#x}`` in
    shell code are kept.
    """
    quote = ""
    i = 0
    while i < len(line):
        ch = line[i]
        if quote:
            if ch == "\\" and quote == '"':
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in quotes:
            quote = ch
        elif line.startswith(marker, i) and (
            marker != "#" or i == 0 or line[i - 1].isspace()
        ):
            return line[:i]
        i += 1
    return line


def previous_lines(lines: Sequence[str], idx: int) -> Iterator[str]:
    """Yield the lines before ``idx``, nearest first."""
    for i in range(idx - 1, -1, -1):
        yield lines[i]


def per_document(func: Callable[[tuple[str, ...]], _T]) -> Callable[[Sequence[str]], _T]:
    """Memoise ``func`` for the most recent document.

    The scanner hands every predicate the same tuple for a document, so the
    cache compares by identity and holds a reference to that tuple. Other
    sequences are converted and computed afresh.
    """
    last: list[tuple[tuple[str, ...], _T]] = []

    @functools.wraps(func)
    def wrapper(lines: Sequence[str]) -> _T:
        if isinstance(lines, tuple):
            if last and last[0][0] is lines:
                return last[0][1]
            result = func(lines)
            last[:] = [(lines, result)]
            return result
        return func(tuple(lines))

    return wrapper


__all__ = ["per_document", "previous_lines", "read_lines", "strip_comment"]
