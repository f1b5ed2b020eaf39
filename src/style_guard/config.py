"""Guard configuration: ignored rules and excluded paths."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TypedDict

from style_guard._types import UnknownJson

_KEYS = ("ignore", "exclude")


class GuardConfig(TypedDict):
    """Guard configuration parameters."""

    ignore: list[str]
    exclude: list[str]


def default_config() -> GuardConfig:
    """Return a configuration that enables every rule and excludes nothing."""
    return {"ignore": [], "exclude": []}


def _decode_str_list(raw: UnknownJson, key: str) -> list[str]:
    if not isinstance(raw, list):
        msg = f"Expected list for '{key}', got {type(raw).__name__}"
        raise TypeError(msg)
    out: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            msg = f"Expected str at {key}[{i}], got {type(item).__name__}"
            raise TypeError(msg)
        out.append(item)
    return out


def _decode_config_json(raw: UnknownJson) -> GuardConfig:
    """Decode raw JSON data as GuardConfig.

    Both keys are optional.

    Raises:
        TypeError: If data structure is incorrect.
        KeyError: If an unknown key is present.
    """
    if not isinstance(raw, dict):
        msg = f"Expected dict, got {type(raw).__name__}"
        raise TypeError(msg)

    unknown = sorted(key for key in raw if key not in _KEYS)
    if unknown:
        msg = f"Unknown config key(s): {', '.join(unknown)}"
        raise KeyError(msg)

    config = default_config()
    if "ignore" in raw:
        config["ignore"] = _decode_str_list(raw["ignore"], "ignore")
    if "exclude" in raw:
        config["exclude"] = _decode_str_list(raw["exclude"], "exclude")
    return config


def load_config_json(path: str | Path) -> GuardConfig:
    """Load guard configuration from a JSON file.

    Raises:
        RuntimeError: If the file cannot be read or is not valid JSON.
        TypeError: If data structure is incorrect.
        KeyError: If an unknown key is present.
    """
    in_path = Path(path)
    try:
        with in_path.open("r", encoding="utf-8") as f:
            raw: UnknownJson = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise RuntimeError(f"failed to load config {in_path}: {exc}") from exc
    return _decode_config_json(raw)


def merge_ignore(config: GuardConfig, extra: list[str]) -> GuardConfig:
    """Return ``config`` with ``extra`` rule ids added to ``ignore``."""
    ignore = list(config["ignore"])
    for rule_id in extra:
        if rule_id not in ignore:
            ignore.append(rule_id)
    return {"ignore": ignore, "exclude": list(config["exclude"])}


__all__ = ["GuardConfig", "default_config", "load_config_json", "merge_ignore"]
