"""Tests for style_guard.rules.markdown and style_guard.rules.changelog."""

from __future__ import annotations

import time

from style_guard.registry import RuleRegistry
from style_guard.rules import Target
from style_guard.rules.markdown import fence_map, in_code_block, slugify
from style_guard.scanner import scan_text


def _found(text: str, target: Target, registry: RuleRegistry) -> list[tuple[int, str]]:
    return [(v.line_no, v.kind) for v in scan_text(text, target, registry)]


_GUIDE = """\
# Guide

See [usage](#usage) and [missing](#nope).

## Usage

```bash
echo hi
```

```
plain
```
"""

_CHANGELOG = """\
# Changelog

## [Unreleased]

### Added

- Bash strict mode rule.

## [1.0.0] - 2024-01-15

### Fixed

- Crash on empty input.

## [0.9.0] - 2023-12-01 [YANKED]

[Unreleased]: https://example.com/compare/v1.0.0...HEAD
"""


class TestFenceMap:
    """Tests for fenced code block detection."""

    def test_openings_and_inside(self) -> None:
        """Test fences are paired and their lines marked."""
        lines = _GUIDE.splitlines()
        fences = fence_map(lines)
        assert fences.openings == {6: "bash", 10: ""}
        assert sorted(fences.inside) == [6, 7, 8, 10, 11, 12]

    def test_longer_closing_fence(self) -> None:
        """Test a closing fence may be longer than the opening one."""
        lines = ["~~~python", "x = 1", "~~~~", "after"]
        assert in_code_block(lines, 1)
        assert not in_code_block(lines, 3)

    def test_shorter_fence_does_not_close(self) -> None:
        """Test a shorter fence inside a block is content."""
        lines = ["````md", "```", "````", "after"]
        assert fence_map(lines).inside == frozenset({0, 1, 2})

    def test_same_document_reuses_map(self) -> None:
        """Test the map is built once per document tuple."""
        doc = tuple(_GUIDE.splitlines())
        assert fence_map(doc) is fence_map(doc)
        assert fence_map(list(doc)) is not fence_map(doc)


class TestSlugify:
    """Tests for GitHub heading anchors."""

    def test_punctuation_dropped(self) -> None:
        """Test punctuation is removed and spaces become dashes."""
        assert slugify("Hello, World!") == "hello-world"

    def test_release_heading(self) -> None:
        """Test a changelog release heading."""
        assert slugify("[1.0.0] - 2024-01-01") == "100---2024-01-01"

    def test_code_span_and_underscore(self) -> None:
        """Test backticks are dropped and underscores kept."""
        assert slugify("Use `scan_lines`") == "use-scan_lines"

    def test_link_text_kept(self) -> None:
        """Test a link in a heading contributes its text only."""
        assert slugify("See [the docs](https://example.com)") == "see-the-docs"


class TestMarkdownRules:
    """Tests for markdown rules."""

    def test_guide_violations(self, registry: RuleRegistry) -> None:
        """Test dangling anchor and untagged fence are reported."""
        assert _found(_GUIDE, "markdown", registry) == [
            (3, "md-anchor-exists"),
            (11, "md-fence-language"),
        ]

    def test_link_inside_fence_ignored(self, registry: RuleRegistry) -> None:
        """Test links in code blocks are not checked."""
        text = "# Doc\n\n```text\n[x](#nowhere)\n```\n"
        assert _found(text, "markdown", registry) == []

    def test_link_inside_code_span_ignored(self, registry: RuleRegistry) -> None:
        """Test links in inline code are not checked."""
        text = "# Doc\n\nWrite `[x](#nowhere)` literally.\n"
        assert _found(text, "markdown", registry) == []

    def test_duplicate_heading_suffix(self, registry: RuleRegistry) -> None:
        """Test repeated headings get numbered anchors."""
        text = "# A\n\n## A\n\n[second](#a-1)\n"
        assert _found(text, "markdown", registry) == []

    def test_html_anchor(self, registry: RuleRegistry) -> None:
        """Test explicit HTML anchors are link targets."""
        text = '<a name="top"></a>\n\n[up](#top)\n'
        assert _found(text, "markdown", registry) == []

    def test_mixed_case_link(self, registry: RuleRegistry) -> None:
        """Test links are matched against lowercase slugs."""
        text = "## Usage\n\n[go](#Usage)\n"
        assert _found(text, "markdown", registry) == []

    def test_setext_heading_anchor(self, registry: RuleRegistry) -> None:
        """Test headings underlined with = or - are link targets."""
        text = "Usage\n=====\n\nOptions\n-------\n\n[go](#usage) and [opts](#options)\n"
        assert _found(text, "markdown", registry) == []

    def test_thematic_break_is_not_heading(self, registry: RuleRegistry) -> None:
        """Test a --- rule after a blank line adds no anchor."""
        text = "Intro\n\n---\n\n[x](#intro)\n"
        assert _found(text, "markdown", registry) == [(5, "md-anchor-exists")]

    def test_large_document_scans_quickly(self, registry: RuleRegistry) -> None:
        """Test scan time grows linearly with document length."""
        block = "## Part\n\nSee [top](#guide).\n\n```text\nx\n```\n\n"
        text = "# Guide\n\n" + block * 2500
        start = time.perf_counter()
        found = _found(text, "markdown", registry)
        elapsed = time.perf_counter() - start
        assert found == []
        assert elapsed < 3.0


class TestChangelogRules:
    """Tests for changelog rules."""

    def test_good_changelog_passes(self, registry: RuleRegistry) -> None:
        """Test a Keep a Changelog document has no violations."""
        assert _found(_CHANGELOG, "changelog", registry) == []

    def test_bad_changelog(self, registry: RuleRegistry) -> None:
        """Test title, unreleased, release and change type violations."""
        text = "# Release notes\n\n## 1.0.0\n\n### Bugfixes\n"
        assert _found(text, "changelog", registry) == [
            (1, "changelog-title"),
            (1, "changelog-unreleased"),
            (3, "changelog-version-heading"),
            (5, "changelog-change-type"),
        ]

    def test_bad_release_date(self, registry: RuleRegistry) -> None:
        """Test a release heading with a non-ISO date."""
        text = "# Changelog\n\n## [Unreleased]\n\n## [1.0.0] - 15/01/2024\n"
        assert _found(text, "changelog", registry) == [(5, "changelog-version-heading")]

    def test_title_after_blank_lines(self, registry: RuleRegistry) -> None:
        """Test the title is the first non-blank line."""
        text = "\n\n# Changelog\n\n## [Unreleased]\n"
        assert _found(text, "changelog", registry) == []

    def test_headings_in_fence_ignored(self, registry: RuleRegistry) -> None:
        """Test headings inside code examples are not checked."""
        text = "# Changelog\n\n## [Unreleased]\n\n```markdown\n## not a release\n### Misc\n```\n"
        assert _found(text, "changelog", registry) == []

    def test_markdown_rules_apply(self, registry: RuleRegistry) -> None:
        """Test markdown rules also run on changelogs."""
        text = "# Changelog\n\n## [Unreleased]\n\n```\nplain\n```\n"
        assert _found(text, "changelog", registry) == [(5, "md-fence-language")]
