"""Single-pass scanner applying rules to documents.

Every function here is a pure function of its input: scanning the same lines
twice yields the same violations in the same order (line-major, then
registry order).
"""

from __future__ import annotations

import fnmatch
from collections.abc import Generator, Iterable, Sequence
from pathlib import Path

from style_guard.registry import RuleRegistry
from style_guard.rules import Rule, Target, Violation
from style_guard.rules.util import read_lines

STDIN = Path("<stdin>")

_SUFFIX_TARGETS: dict[str, Target] = {
    ".sh": "bash",
    ".bash": "bash",
    ".rs": "rust",
    ".swift": "swift",
    ".md": "markdown",
    ".markdown": "markdown",
}
_BASH_SHEBANGS = ("#!/bin/bash", "#!/usr/bin/env bash")


def detect_target(path: Path, first_line: str = "") -> Target | None:
    """Guess the document kind of ``path``.

    Checks the file name, then the suffix, then a shell shebang on the first
    line. Returns None when nothing matches.
    """
    name = path.name
    if name == "COMMIT_EDITMSG" or name.endswith(".gitmessage"):
        return "commit"
    if name.upper().startswith("CHANGELOG") and path.suffix.lower() in (".md", ".markdown"):
        return "changelog"
    target = _SUFFIX_TARGETS.get(path.suffix.lower())
    if target is not None:
        return target
    if first_line.startswith(_BASH_SHEBANGS):
        return "bash"
    return None


def scan_lines(
    lines: Sequence[str],
    rules: Iterable[Rule],
    file: Path = STDIN,
) -> Generator[Violation, None, None]:
    """Yield a violation for each line each rule matches."""
    doc = tuple(line.rstrip("\n") for line in lines)
    active = tuple(rules)
    for idx, line in enumerate(doc):
        for rule in active:
            if rule.detect(doc, idx):
                yield Violation(file=file, line_no=idx + 1, kind=rule.id, line=line.rstrip())


def scan_text(
    text: str,
    target: Target,
    registry: RuleRegistry,
    file: Path = STDIN,
) -> Generator[Violation, None, None]:
    """Scan a whole document of kind ``target``."""
    yield from scan_lines(text.splitlines(), registry.for_target(target), file=file)


def scan_file(
    path: Path,
    registry: RuleRegistry,
    target: Target | None = None,
) -> list[Violation]:
    """Read and scan one file.

    Raises:
        RuntimeError: If the file cannot be read or its kind is unknown.
    """
    lines = read_lines(path)
    if target is None:
        target = detect_target(path, lines[0] if lines else "")
    if target is None:
        raise RuntimeError(f"cannot determine document kind of {path}; pass --target")
    return list(scan_lines(lines, registry.for_target(target), file=path))


def _excluded(path: Path, exclude: Sequence[str]) -> bool:
    posix = path.as_posix()
    return any(
        fnmatch.fnmatch(posix, pattern) or fnmatch.fnmatch(path.name, pattern)
        for pattern in exclude
    )


def _has_target(path: Path) -> bool:
    if detect_target(path) is not None:
        return True
    if path.suffix != "":
        return False
    # Extensionless scripts are recognised by their shebang.
    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            first_line = f.readline()
    except OSError as exc:
        raise RuntimeError(f"failed to read {path}: {exc}") from exc
    return detect_target(path, first_line) is not None


def iter_files(paths: Iterable[Path], exclude: Sequence[str] = ()) -> Generator[Path, None, None]:
    """Expand ``paths`` into the files to scan.

    Files given explicitly are always yielded. Directories are walked
    recursively and only files of a known kind are kept. Hidden directories
    are skipped.
    """
    for path in paths:
        if _excluded(path, exclude):
            continue
        if not path.is_dir():
            yield path
            continue
        found: list[Path] = []
        for child in path.rglob("*"):
            rel = child.relative_to(path)
            if any(part.startswith(".") for part in rel.parts[:-1]):
                continue
            if not child.is_file() or _excluded(child, exclude):
                continue
            if _has_target(child):
                found.append(child)
        yield from sorted(found)


__all__ = ["STDIN", "detect_target", "iter_files", "scan_file", "scan_lines", "scan_text"]
