"""Bash script rules.

Violations:
- bash-shebang: first line is not a bash shebang
- bash-strict-mode: script never enables both `set -e` and `set -u`
- bash-no-backticks: command substitution with backticks
- bash-double-brackets: `[ ... ]` test instead of `[[ ... ]]`
- bash-no-function-keyword: `function name` instead of `name() {`
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from style_guard.rules import Rule
from style_guard.rules.util import strip_comment

SHEBANGS = frozenset({"#!/usr/bin/env bash", "#!/bin/bash"})

_SET = re.compile(r"^\s*set\s+(.+)$")
_LONG_OPTIONS = {"errexit": "e", "nounset": "u"}
_SINGLE_QUOTED = re.compile(r"'[^']*'")
_SINGLE_BRACKET = re.compile(r"(?:^|[\s;&|!(])\[(?!\[)\s")
_FUNCTION_KEYWORD = re.compile(r"^\s*function\s+[A-Za-z_][\w:.-]*")


def _code(line: str) -> str:
    return strip_comment(line, "#")


def _set_options(line: str) -> set[str]:
    """Return the single-letter options a `set` line switches on."""
    match = _SET.match(_code(line))
    if match is None:
        return set()
    tokens = match.group(1).split()
    options: set[str] = set()
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if not token.startswith("-") or token.startswith("--"):
            i += 1
            continue
        letters = token[1:]
        options.update(letters.replace("o", ""))
        if letters.endswith("o") and i + 1 < len(tokens):
            long_name = tokens[i + 1]
            if long_name in _LONG_OPTIONS:
                options.add(_LONG_OPTIONS[long_name])
            i += 2
            continue
        i += 1
    return options


def _bad_shebang(lines: Sequence[str], idx: int) -> bool:
    return idx == 0 and lines[0].rstrip() not in SHEBANGS


def _no_strict_mode(lines: Sequence[str], idx: int) -> bool:
    if idx != 0:
        return False
    enabled: set[str] = set()
    for line in lines:
        enabled |= _set_options(line)
    return not {"e", "u"} <= enabled


def _uses_backticks(lines: Sequence[str], idx: int) -> bool:
    code = _SINGLE_QUOTED.sub("''", _code(lines[idx]))
    return "`" in code


def _single_bracket_test(lines: Sequence[str], idx: int) -> bool:
    code = _SINGLE_QUOTED.sub("''", _code(lines[idx]))
    return _SINGLE_BRACKET.search(code) is not None


def _function_keyword(lines: Sequence[str], idx: int) -> bool:
    return _FUNCTION_KEYWORD.match(_code(lines[idx])) is not None


RULES: tuple[Rule, ...] = (
    Rule(
        id="bash-shebang",
        target="bash",
        convention="Start scripts with `#!/usr/bin/env bash`.",
        detect=_bad_shebang,
    ),
    Rule(
        id="bash-strict-mode",
        target="bash",
        convention="Enable `set -eu` so failures and unset variables abort the script.",
        detect=_no_strict_mode,
    ),
    Rule(
        id="bash-no-backticks",
        target="bash",
        convention="Use `$(...)` for command substitution, not backticks.",
        detect=_uses_backticks,
    ),
    Rule(
        id="bash-double-brackets",
        target="bash",
        convention="Use `[[ ... ]]` for tests instead of `[ ... ]`.",
        detect=_single_bracket_test,
    ),
    Rule(
        id="bash-no-function-keyword",
        target="bash",
        convention="Declare functions as `name() {`, without the `function` keyword.",
        detect=_function_keyword,
    ),
)


__all__ = ["RULES", "SHEBANGS"]
