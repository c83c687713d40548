"""Engine settings with optional JSON file loading.

Settings files use camelCase keys::

    {
      "multiline": true,
      "caseSensitiveSearch": false,
      "clearOnCancel": true,
      "keybindings": {"historySearch": "ctrl+t"}
    }

A project file can be layered over a global one with
``deep_merge_settings``; ``None`` values never override.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from keyline.keys import KeyId

logger = logging.getLogger(__name__)


class SettingsError(ValueError):
    """A settings value has the wrong type."""


def _settings_defaults() -> dict[str, Any]:
    """Default settings values."""
    return {
        "multiline": False,
        "caseSensitiveSearch": True,
        "clearOnCancel": False,
        "keybindings": {},
    }


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- Settings schema ---


@dataclass
class EngineSettings:
    """Construction-time behaviour of a line engine."""

    multiline: bool = False
    case_sensitive_search: bool = True
    clear_on_cancel: bool = False
    keybindings: dict[str, KeyId | list[KeyId]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineSettings:
        """Build settings from a camelCase mapping.

        Raises ``SettingsError`` when a value has the wrong type.
        """
        merged = deep_merge_settings(_settings_defaults(), data)

        for key in ("multiline", "caseSensitiveSearch", "clearOnCancel"):
            if not isinstance(merged[key], bool):
                raise SettingsError(f"{key} must be a boolean, got {merged[key]!r}")

        keybindings = merged["keybindings"]
        if not isinstance(keybindings, dict):
            raise SettingsError("keybindings must be an object")
        for action, keys in keybindings.items():
            key_list = keys if isinstance(keys, list) else [keys]
            if not all(isinstance(k, str) and k for k in key_list):
                raise SettingsError(f"keybindings.{action} must be a key id or a list of key ids")

        return cls(
            multiline=merged["multiline"],
            case_sensitive_search=merged["caseSensitiveSearch"],
            clear_on_cancel=merged["clearOnCancel"],
            keybindings=dict(keybindings),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "multiline": self.multiline,
            "caseSensitiveSearch": self.case_sensitive_search,
            "clearOnCancel": self.clear_on_cancel,
            "keybindings": dict(self.keybindings),
        }


# --- File loading ---


def _load_from_file(path: str | Path) -> tuple[dict[str, Any], Exception | None]:
    """Load a JSON settings file. Returns (settings, error)."""
    p = Path(path)
    if not p.exists():
        return {}, None
    try:
        content = p.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as e:
        return {}, e
    if not isinstance(data, dict):
        return {}, SettingsError(f"{p} must contain a JSON object")
    return data, None


def load_settings(
    path: str | Path,
    project_path: str | Path | None = None,
) -> tuple[EngineSettings, Exception | None]:
    """Load settings from *path*, optionally layering *project_path* on top.

    Never raises: missing files give defaults, broken files give defaults
    plus the error that was hit.
    """
    data, error = _load_from_file(path)
    if project_path is not None:
        project, project_error = _load_from_file(project_path)
        data = deep_merge_settings(data, project)
        error = error or project_error

    try:
        settings = EngineSettings.from_dict(data)
    except SettingsError as e:
        settings, error = EngineSettings(), e

    if error is not None:
        logger.warning("Failed to load settings from %s: %s", path, error)
    return settings, error
