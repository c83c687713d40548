"""Tests for keyline.keybindings -- keybindings manager."""

from __future__ import annotations

import logging

import pytest

from keyline.keybindings import (
    DEFAULT_KEYBINDINGS,
    ENGINE_ACTIONS,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)
from keyline.keys import KeyEvent

ENTER = KeyEvent.named("enter")
SHIFT_ENTER = KeyEvent.named("enter", shift=True)
UP = KeyEvent.named("up")
CTRL_R = KeyEvent.char("r", ctrl=True)


# ---------------------------------------------------------------------------
# DEFAULT_KEYBINDINGS constant
# ---------------------------------------------------------------------------


class TestDefaultKeybindings:
    """DEFAULT_KEYBINDINGS covers every action."""

    def test_every_action_has_a_default(self):
        assert set(DEFAULT_KEYBINDINGS) == set(ENGINE_ACTIONS)

    def test_canonical_bindings(self):
        assert DEFAULT_KEYBINDINGS["submit"] == "enter"
        assert DEFAULT_KEYBINDINGS["newLine"] == "shift+enter"
        assert DEFAULT_KEYBINDINGS["cancel"] == "ctrl+c"
        assert DEFAULT_KEYBINDINGS["clear"] == "ctrl+l"
        assert DEFAULT_KEYBINDINGS["historySearch"] == "ctrl+r"

    def test_history_has_emacs_aliases(self):
        assert "ctrl+p" in DEFAULT_KEYBINDINGS["historyOlder"]
        assert "ctrl+n" in DEFAULT_KEYBINDINGS["historyNewer"]


# ---------------------------------------------------------------------------
# KeybindingsManager
# ---------------------------------------------------------------------------


class TestKeybindingsManager:
    """KeybindingsManager matches events against actions."""

    def test_matches_default(self):
        mgr = KeybindingsManager()
        assert mgr.matches(ENTER, "submit") is True
        assert mgr.matches(SHIFT_ENTER, "submit") is False
        assert mgr.matches(SHIFT_ENTER, "newLine") is True

    def test_one_key_can_serve_several_actions(self):
        mgr = KeybindingsManager()
        assert mgr.matches(UP, "historyOlder") is True
        assert mgr.matches(UP, "selectUp") is True
        assert mgr.matches(UP, "searchOlder") is True

    def test_get_keys_returns_list(self):
        mgr = KeybindingsManager()
        assert mgr.get_keys("submit") == ["enter"]
        assert mgr.get_keys("cursorLeft") == ["left", "ctrl+b"]

    def test_override_replaces_keys(self):
        mgr = KeybindingsManager({"historySearch": "ctrl+t"})
        assert mgr.matches(CTRL_R, "historySearch") is False
        assert mgr.matches(KeyEvent.char("t", ctrl=True), "historySearch") is True

    def test_override_accepts_list(self):
        mgr = KeybindingsManager({"submit": ["enter", "ctrl+j"]})
        assert mgr.matches(KeyEvent.char("j", ctrl=True), "submit") is True

    def test_override_leaves_other_actions(self):
        mgr = KeybindingsManager({"submit": "ctrl+j"})
        assert mgr.matches(CTRL_R, "historySearch") is True

    def test_unbound_action_never_matches(self):
        mgr = KeybindingsManager({"clear": []})
        assert mgr.matches(KeyEvent.char("l", ctrl=True), "clear") is False

    def test_unknown_action_is_ignored(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="keyline.keybindings"):
            mgr = KeybindingsManager({"teleport": "ctrl+t"})
        assert "teleport" in caplog.text
        assert mgr.get_keys("submit") == ["enter"]

    def test_set_config_rebuilds_from_defaults(self):
        mgr = KeybindingsManager({"submit": "ctrl+j"})
        mgr.set_config({})
        assert mgr.get_keys("submit") == ["enter"]


# ---------------------------------------------------------------------------
# Global singleton
# ---------------------------------------------------------------------------


class TestGlobalKeybindings:
    """get_keybindings / set_keybindings manage a global instance."""

    def teardown_method(self):
        import keyline.keybindings as kb_module
        kb_module._global_keybindings = None

    def test_get_returns_manager(self):
        assert isinstance(get_keybindings(), KeybindingsManager)

    def test_get_is_stable(self):
        assert get_keybindings() is get_keybindings()

    def test_set_replaces_global(self):
        custom = KeybindingsManager({"submit": "space"})
        set_keybindings(custom)
        assert get_keybindings() is custom
        assert get_keybindings().matches(KeyEvent.char(" "), "submit") is True
