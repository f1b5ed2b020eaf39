"""Command-line entry point.

Scans the given files (or directories, recursively) against the style rules
and prints one line per violation.

Exit codes: 0 when clean, 2 when violations were found, 1 on usage,
configuration or read errors.

Run with: style-guard PATH [PATH ...]
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TypedDict

from style_guard._console import (
    log_error,
    log_failed,
    log_header,
    log_passed,
    log_report,
    log_rule,
    log_violation,
)
from style_guard.config import GuardConfig, default_config, load_config_json, merge_ignore
from style_guard.registry import RuleRegistry, default_registry
from style_guard.rules import TARGETS, RuleReport, Target, Violation
from style_guard.scanner import iter_files, scan_file, scan_text

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VIOLATIONS = 2

MAX_TEXT = 80


class ParsedArgs(TypedDict):
    """Parsed command-line arguments."""

    paths: list[str]
    target: Target | None
    ignore: list[str]
    config: str | None
    list_rules: bool


def _as_target(value: str | None) -> Target | None:
    for target in TARGETS:
        if value == target:
            return target
    if value is not None:
        msg = f"Expected one of {', '.join(TARGETS)} for target, got {value!r}"
        raise ValueError(msg)
    return None


def _extract_args(args: argparse.Namespace) -> ParsedArgs:
    """Extract and validate arguments from Namespace.

    Raises:
        TypeError: If argument types are incorrect.
        ValueError: If the target is not a known document kind.
    """
    paths = args.paths
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        msg = f"Expected list of str for paths, got {type(paths).__name__}"
        raise TypeError(msg)

    target = args.target
    if target is not None and not isinstance(target, str):
        msg = f"Expected str or None for target, got {type(target).__name__}"
        raise TypeError(msg)

    ignore = args.ignore
    if not isinstance(ignore, list) or not all(isinstance(i, str) for i in ignore):
        msg = f"Expected list of str for ignore, got {type(ignore).__name__}"
        raise TypeError(msg)

    config = args.config
    if config is not None and not isinstance(config, str):
        msg = f"Expected str or None for config, got {type(config).__name__}"
        raise TypeError(msg)

    list_rules = args.list_rules
    if not isinstance(list_rules, bool):
        msg = f"Expected bool for list_rules, got {type(list_rules).__name__}"
        raise TypeError(msg)

    return {
        "paths": list(paths),
        "target": _as_target(target),
        "ignore": list(ignore),
        "config": config,
        "list_rules": list_rules,
    }


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="style-guard",
        description="Check commit messages, scripts, sources and changelogs against style rules",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to scan; '-' reads stdin (requires --target)",
    )
    parser.add_argument(
        "--target",
        type=str,
        default=None,
        choices=list(TARGETS),
        help="Treat every input as this kind of document instead of guessing",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="RULE",
        help="Rule id to skip (repeatable)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON file with 'ignore' and 'exclude' lists",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List all rules and exit",
    )
    return parser.parse_args(argv)


def _error_message(exc: Exception) -> str:
    # KeyError wraps its message in quotes when converted with str().
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    return str(exc)


def _load_config(args: ParsedArgs) -> GuardConfig:
    config = default_config() if args["config"] is None else load_config_json(args["config"])
    return merge_ignore(config, args["ignore"])


def _scan(args: ParsedArgs, config: GuardConfig, registry: RuleRegistry) -> list[Violation]:
    violations: list[Violation] = []
    paths = [Path(p) for p in args["paths"] if p != "-"]
    if "-" in args["paths"]:
        if args["target"] is None:
            raise RuntimeError("reading stdin requires --target")
        violations.extend(scan_text(sys.stdin.read(), args["target"], registry))
    for path in iter_files(paths, config["exclude"]):
        if not path.exists():
            raise RuntimeError(f"no such file or directory: {path}")
        violations.extend(scan_file(path, registry, args["target"]))
    return violations


def _reports(violations: list[Violation], registry: RuleRegistry) -> list[RuleReport]:
    counts: dict[str, int] = dict.fromkeys(TARGETS, 0)
    for v in violations:
        counts[registry.get(v.kind).target] += 1
    return [RuleReport(name=name, violations=count) for name, count in counts.items()]


def _print_violations(violations: list[Violation]) -> None:
    for v in violations:
        text = v.line[:MAX_TEXT] + "..." if len(v.line) > MAX_TEXT else v.line
        log_violation(f"{v.file}:{v.line_no}", v.kind, text)


def run_guard(args: ParsedArgs) -> int:
    """Run the guard for parsed arguments and return the exit code."""
    try:
        config = _load_config(args)
        registry = default_registry().without(config["ignore"])
    except (RuntimeError, TypeError, KeyError) as exc:
        log_error(_error_message(exc))
        return EXIT_ERROR

    if args["list_rules"]:
        for rule in registry:
            log_rule(rule.id, rule.target, rule.convention)
        return EXIT_OK

    if not args["paths"]:
        log_error("no input paths given")
        return EXIT_ERROR

    try:
        violations = _scan(args, config, registry)
    except RuntimeError as exc:
        log_error(str(exc))
        return EXIT_ERROR

    _print_violations(violations)
    log_header("Guard rule summary:")
    for rep in _reports(violations, registry):
        log_report(rep.name, rep.violations)

    if violations:
        log_failed(f"Guard checks failed: {len(violations)} violations.")
        return EXIT_VIOLATIONS

    log_passed("Guard checks passed: no violations found.")
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the style-guard command.

    argparse exits with 2 on bad arguments; that code means "violations
    found" here, so usage errors are mapped to EXIT_ERROR. ``--help`` stays 0.
    """
    try:
        raw_args = parse_args(argv)
    except SystemExit as exc:
        return EXIT_OK if exc.code in (0, None) else EXIT_ERROR
    return run_guard(_extract_args(raw_args))


__all__ = ["EXIT_ERROR", "EXIT_OK", "EXIT_VIOLATIONS", "main", "parse_args", "run_guard"]
