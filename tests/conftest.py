"""Pytest fixtures for style_guard tests."""

from __future__ import annotations

import pytest

from style_guard.registry import RuleRegistry, default_registry


@pytest.fixture
def registry() -> RuleRegistry:
    """Return the built-in rule registry."""
    return default_registry()
