"""Tests for style_guard.config module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from style_guard.config import default_config, load_config_json, merge_ignore


def _write_json(path: Path, data: dict[str, list[str] | str | list[int]]) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestLoadConfig:
    """Tests for load_config_json."""

    def test_full_config(self, tmp_path: Path) -> None:
        """Test loading both keys."""
        path = tmp_path / "guard.json"
        _write_json(path, {"ignore": ["bash-shebang"], "exclude": ["vendor/*"]})
        assert load_config_json(path) == {"ignore": ["bash-shebang"], "exclude": ["vendor/*"]}

    def test_keys_optional(self, tmp_path: Path) -> None:
        """Test missing keys fall back to empty lists."""
        path = tmp_path / "guard.json"
        _write_json(path, {"exclude": ["build/*"]})
        assert load_config_json(str(path)) == {"ignore": [], "exclude": ["build/*"]}

    def test_not_a_dict(self, tmp_path: Path) -> None:
        """Test a top-level list is rejected."""
        path = tmp_path / "guard.json"
        path.write_text('["bash-shebang"]', encoding="utf-8")
        with pytest.raises(TypeError, match="Expected dict, got list"):
            load_config_json(path)

    def test_wrong_value_type(self, tmp_path: Path) -> None:
        """Test a string instead of a list is rejected."""
        path = tmp_path / "guard.json"
        _write_json(path, {"ignore": "bash-shebang"})
        with pytest.raises(TypeError, match="Expected list for 'ignore', got str"):
            load_config_json(path)

    def test_wrong_item_type(self, tmp_path: Path) -> None:
        """Test non-string list items are rejected."""
        path = tmp_path / "guard.json"
        _write_json(path, {"exclude": [1]})
        with pytest.raises(TypeError, match=r"Expected str at exclude\[0\], got int"):
            load_config_json(path)

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Test unknown keys are rejected."""
        path = tmp_path / "guard.json"
        _write_json(path, {"select": ["x"]})
        with pytest.raises(KeyError, match="Unknown config key"):
            load_config_json(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises RuntimeError."""
        with pytest.raises(RuntimeError, match="failed to load config"):
            load_config_json(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test malformed JSON raises RuntimeError."""
        path = tmp_path / "guard.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RuntimeError, match="failed to load config"):
            load_config_json(path)


class TestMergeIgnore:
    """Tests for merge_ignore."""

    def test_merge_dedups(self) -> None:
        """Test extra ids are appended once."""
        merged = merge_ignore({"ignore": ["a"], "exclude": ["x"]}, ["a", "b"])
        assert merged == {"ignore": ["a", "b"], "exclude": ["x"]}

    def test_merge_does_not_mutate(self) -> None:
        """Test the input config is left unchanged."""
        config = default_config()
        merge_ignore(config, ["a"])
        assert config == {"ignore": [], "exclude": []}
