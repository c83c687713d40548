"""Line engine keybindings manager."""

from __future__ import annotations

import logging
from typing import Literal, Mapping, get_args

from keyline.keys import KeyEvent, KeyId, matches_key

logger = logging.getLogger(__name__)

EngineAction = Literal[
    # Cursor movement
    "cursorUp",
    "cursorDown",
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    "deleteCharForward",
    "deleteWordBackward",
    "deleteToLineStart",
    "deleteToLineEnd",
    "clear",
    # Text input
    "newLine",
    "submit",
    "tab",
    # History
    "historyOlder",
    "historyNewer",
    "historySearch",
    # Reverse search
    "searchOlder",
    "searchNewer",
    "searchAccept",
    "searchAbort",
    # Suggestions
    "selectUp",
    "selectDown",
    "selectCancel",
    # Interaction
    "cancel",
]

ENGINE_ACTIONS: frozenset[str] = frozenset(get_args(EngineAction))

KeybindingsConfig = dict[EngineAction, KeyId | list[KeyId]]

DEFAULT_KEYBINDINGS: dict[EngineAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorUp": "up",
    "cursorDown": "down",
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    # Deletion
    "deleteCharBackward": "backspace",
    "deleteCharForward": ["delete", "ctrl+d"],
    "deleteWordBackward": ["ctrl+w", "alt+backspace"],
    "deleteToLineStart": "ctrl+u",
    "deleteToLineEnd": "ctrl+k",
    "clear": "ctrl+l",
    # Text input
    "newLine": "shift+enter",
    "submit": "enter",
    "tab": "tab",
    # History
    "historyOlder": ["up", "ctrl+p"],
    "historyNewer": ["down", "ctrl+n"],
    "historySearch": "ctrl+r",
    # Reverse search
    "searchOlder": ["ctrl+r", "up"],
    "searchNewer": ["ctrl+s", "down"],
    "searchAccept": "enter",
    "searchAbort": ["escape", "ctrl+g"],
    # Suggestions
    "selectUp": ["up", "ctrl+p"],
    "selectDown": ["down", "ctrl+n"],
    "selectCancel": "escape",
    # Interaction
    "cancel": "ctrl+c",
}


class KeybindingsManager:
    """Maps engine actions to the keys that trigger them."""

    def __init__(
        self, config: Mapping[str, KeyId | list[KeyId]] | None = None
    ) -> None:
        self._action_to_keys: dict[EngineAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: Mapping[str, KeyId | list[KeyId]]) -> None:
        self._action_to_keys.clear()

        # Start with defaults
        for action, keys in DEFAULT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            if action not in ENGINE_ACTIONS:
                logger.warning("Ignoring keybinding for unknown action %r", action)
                continue
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)  # type: ignore[index]

    def matches(self, event: KeyEvent, action: EngineAction) -> bool:
        """Check if the event triggers a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        for key in keys:
            if matches_key(event, key):
                return True
        return False

    def get_keys(self, action: EngineAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: Mapping[str, KeyId | list[KeyId]]) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_keybindings: KeybindingsManager | None = None


def get_keybindings() -> KeybindingsManager:
    global _global_keybindings
    if _global_keybindings is None:
        _global_keybindings = KeybindingsManager()
    return _global_keybindings


def set_keybindings(manager: KeybindingsManager) -> None:
    global _global_keybindings
    _global_keybindings = manager
