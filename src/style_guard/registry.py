"""Static registry of all style rules."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from style_guard.rules import TARGETS, Rule, Target
from style_guard.rules import bash, changelog, commit, markdown, rust, swift

# A changelog is a markdown document and gets the markdown rules too.
TARGET_INCLUDES: dict[Target, tuple[Target, ...]] = {"changelog": ("changelog", "markdown")}


class RuleRegistry:
    """Read-only, ordered collection of rules with unique ids."""

    def __init__(self, rules: Iterable[Rule]) -> None:
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._by_id: dict[str, Rule] = {}
        for rule in self._rules:
            if rule.id in self._by_id:
                raise RuntimeError(f"duplicate rule id: {rule.id}")
            if rule.target not in TARGETS:
                raise RuntimeError(f"rule {rule.id} has unknown target {rule.target!r}")
            self._by_id[rule.id] = rule

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: str) -> bool:
        return rule_id in self._by_id

    def get(self, rule_id: str) -> Rule:
        """Return the rule with ``rule_id``.

        Raises:
            KeyError: If no rule has that id.
        """
        if rule_id not in self._by_id:
            raise KeyError(f"unknown rule id: {rule_id}")
        return self._by_id[rule_id]

    def ids(self) -> list[str]:
        return [rule.id for rule in self._rules]

    def for_target(self, target: Target) -> tuple[Rule, ...]:
        """Rules that apply to documents of ``target``, in registry order."""
        targets = TARGET_INCLUDES.get(target, (target,))
        return tuple(rule for rule in self._rules if rule.target in targets)

    def without(self, rule_ids: Iterable[str]) -> RuleRegistry:
        """Return a new registry without ``rule_ids``.

        Raises:
            KeyError: If any id is not registered.
        """
        dropped = set(rule_ids)
        unknown = sorted(dropped - set(self._by_id))
        if unknown:
            raise KeyError(f"unknown rule id: {', '.join(unknown)}")
        return RuleRegistry(rule for rule in self._rules if rule.id not in dropped)


_DEFAULT = RuleRegistry(
    commit.RULES + bash.RULES + rust.RULES + swift.RULES + changelog.RULES + markdown.RULES
)


def default_registry() -> RuleRegistry:
    """Return the built-in registry."""
    return _DEFAULT


__all__ = ["TARGET_INCLUDES", "RuleRegistry", "default_registry"]
