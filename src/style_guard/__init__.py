"""Style rule registry and line scanner for commit messages, scripts and docs."""

from style_guard.registry import RuleRegistry, default_registry
from style_guard.rules import Rule, RuleReport, Violation
from style_guard.scanner import detect_target, scan_file, scan_lines, scan_text

__all__ = [
    "Rule",
    "RuleRegistry",
    "RuleReport",
    "Violation",
    "default_registry",
    "detect_target",
    "scan_file",
    "scan_lines",
    "scan_text",
]
