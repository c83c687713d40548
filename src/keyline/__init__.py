"""keyline: interactive line-editing engine for terminal prompts."""

# Buffer
from keyline.buffer import LINE_SEPARATOR, BufferState, EditorBuffer

# Dispatch table
from keyline.dispatch import Action, ActionKind, DispatchContext, dispatch

# Engine
from keyline.engine import LineEngine, RenderState

# History
from keyline.history import HistoryNavigator

# Keybindings
from keyline.keybindings import (
    DEFAULT_KEYBINDINGS,
    EngineAction,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)

# Key events
from keyline.keys import Key, KeyEvent, KeyId, Modifiers, matches_key, parse_key_id

# Modes
from keyline.mode import Mode, ModeController

# Settings
from keyline.settings import EngineSettings, SettingsError, load_settings

# Candidate sources
from keyline.sources import history_suggestions, prefix_suggestions

# Suggestions
from keyline.suggestions import Suggestion, SuggestionSelector

# Utilities
from keyline.text import visible_width

__all__ = [
    # Buffer
    "LINE_SEPARATOR",
    "BufferState",
    "EditorBuffer",
    # Dispatch
    "Action",
    "ActionKind",
    "DispatchContext",
    "dispatch",
    # Engine
    "LineEngine",
    "RenderState",
    # History
    "HistoryNavigator",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "EngineAction",
    "KeybindingsManager",
    "get_keybindings",
    "set_keybindings",
    # Keys
    "Key",
    "KeyEvent",
    "KeyId",
    "Modifiers",
    "matches_key",
    "parse_key_id",
    # Modes
    "Mode",
    "ModeController",
    # Settings
    "EngineSettings",
    "SettingsError",
    "load_settings",
    # Sources
    "history_suggestions",
    "prefix_suggestions",
    # Suggestions
    "Suggestion",
    "SuggestionSelector",
    # Utilities
    "visible_width",
]
