"""Rule and violation types shared by the registry and the scanner.

A rule pairs a convention from the style guides with a predicate over one
line of a document. The predicate sees the whole document so that a rule can
look at neighbouring lines, but it is always evaluated for a single index.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Literal, NamedTuple

Target = Literal["commit", "bash", "rust", "swift", "changelog", "markdown"]

TARGETS: tuple[Target, ...] = ("commit", "bash", "rust", "swift", "changelog", "markdown")

Predicate = Callable[[Sequence[str], int], bool]


class Rule(NamedTuple):
    """A named convention and its detection predicate.

    ``detect(lines, idx)`` returns True when ``lines[idx]`` violates the
    convention.
    """

    id: str
    target: Target
    convention: str
    detect: Predicate


class Violation(NamedTuple):
    """A single rule violation."""

    file: Path
    line_no: int
    kind: str
    line: str


class RuleReport(NamedTuple):
    """Summary of violations for a rule group."""

    name: str
    violations: int


__all__ = ["TARGETS", "Predicate", "Rule", "RuleReport", "Target", "Violation"]
