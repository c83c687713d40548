"""Tests for keyline.dispatch -- the (mode, key) -> action table."""

from __future__ import annotations

import pytest

from keyline.dispatch import CANCEL, NOOP, SUBMIT, Action, DispatchContext, dispatch
from keyline.keybindings import KeybindingsManager
from keyline.keys import KeyEvent, Modifiers

ACTIVE = DispatchContext(suggestions_active=True)
MULTILINE = DispatchContext(multiline_enabled=True)


def key(key_id: str) -> KeyEvent:
    return KeyEvent.from_key_id(key_id)


class TestNormalMode:
    @pytest.mark.parametrize(
        "key_id, op",
        [
            ("backspace", "delete_backward"),
            ("delete", "delete_forward"),
            ("ctrl+d", "delete_forward"),
            ("left", "move_left"),
            ("right", "move_right"),
            ("home", "move_line_start"),
            ("ctrl+a", "move_line_start"),
            ("ctrl+e", "move_line_end"),
            ("ctrl+w", "delete_word_backward"),
            ("alt+backspace", "delete_word_backward"),
            ("ctrl+u", "delete_to_line_start"),
            ("ctrl+k", "delete_to_line_end"),
            ("ctrl+l", "clear"),
        ],
    )
    def test_edit_bindings(self, key_id: str, op: str) -> None:
        assert dispatch("normal", key(key_id)) == Action("edit", op)

    def test_printable_inserts(self) -> None:
        assert dispatch("normal", KeyEvent.char("a")) == Action("edit", "insert", "a")

    def test_shifted_character_inserts(self) -> None:
        event = KeyEvent.char("A", shift=True)
        assert dispatch("normal", event) == Action("edit", "insert", "A")

    def test_enter_submits(self) -> None:
        assert dispatch("normal", key("enter")) == SUBMIT

    def test_history_keys(self) -> None:
        assert dispatch("normal", key("up")) == Action("history", "older")
        assert dispatch("normal", key("down")) == Action("history", "newer")
        assert dispatch("normal", key("ctrl+p")) == Action("history", "older")

    def test_ctrl_r_enters_search(self) -> None:
        assert dispatch("normal", key("ctrl+r")) == Action("mode", "enter_search")

    def test_tab_without_suggestions_is_noop(self) -> None:
        assert dispatch("normal", key("tab")) == NOOP

    def test_shift_enter_disabled_is_noop(self) -> None:
        assert dispatch("normal", key("shift+enter")) == NOOP

    def test_shift_enter_enabled_is_soft_newline(self) -> None:
        action = dispatch("normal", key("shift+enter"), MULTILINE)
        assert action == Action("mode", "soft_newline")

    def test_unbound_ctrl_key_is_noop(self) -> None:
        assert dispatch("normal", key("ctrl+y")) == NOOP

    def test_named_space_inserts_space(self) -> None:
        assert dispatch("normal", KeyEvent.named("space")) == Action("edit", "insert", " ")

    def test_ctrl_space_is_noop(self) -> None:
        assert dispatch("normal", KeyEvent.named("space", ctrl=True)) == NOOP

    def test_empty_event_is_noop(self) -> None:
        assert dispatch("normal", KeyEvent()) == NOOP

    def test_control_characters_are_stripped(self) -> None:
        assert dispatch("normal", KeyEvent.char("\x07")) == NOOP

    def test_tab_character_becomes_spaces(self) -> None:
        assert dispatch("normal", KeyEvent.char("a\tb")).text == "a    b"

    def test_pasted_newlines_become_spaces_when_disabled(self) -> None:
        assert dispatch("normal", KeyEvent.char("a\r\nb")).text == "a b"

    def test_pasted_newlines_kept_when_enabled(self) -> None:
        assert dispatch("normal", KeyEvent.char("a\r\nb"), MULTILINE).text == "a\nb"


class TestSuggestionPrecedence:
    """Visible suggestions take navigation and acceptance keys."""

    def test_arrows_move_selection(self) -> None:
        assert dispatch("normal", key("up"), ACTIVE) == Action("suggestion", "move_up")
        assert dispatch("normal", key("down"), ACTIVE) == Action("suggestion", "move_down")

    def test_tab_accepts_and_continues(self) -> None:
        assert dispatch("normal", key("tab"), ACTIVE) == Action("suggestion", "accept_and_continue")

    def test_enter_accepts_via_submit(self) -> None:
        assert dispatch("normal", key("enter"), ACTIVE) == Action("suggestion", "accept_via_submit")

    def test_escape_dismisses(self) -> None:
        assert dispatch("normal", key("escape"), ACTIVE) == Action("suggestion", "dismiss")

    def test_typing_still_inserts(self) -> None:
        assert dispatch("normal", KeyEvent.char("x"), ACTIVE) == Action("edit", "insert", "x")

    def test_ctrl_c_wins_over_suggestions(self) -> None:
        assert dispatch("normal", key("ctrl+c"), ACTIVE) == CANCEL


class TestMultilineMode:
    def test_up_moves_between_lines(self) -> None:
        ctx = DispatchContext(multiline_enabled=True, on_first_line=False)
        assert dispatch("multiline", key("up"), ctx) == Action("edit", "move_up")

    def test_up_on_first_line_reaches_history(self) -> None:
        ctx = DispatchContext(multiline_enabled=True, on_first_line=True, on_last_line=False)
        assert dispatch("multiline", key("up"), ctx) == Action("history", "older")

    def test_down_moves_between_lines(self) -> None:
        ctx = DispatchContext(multiline_enabled=True, on_last_line=False)
        assert dispatch("multiline", key("down"), ctx) == Action("edit", "move_down")

    def test_enter_still_submits(self) -> None:
        assert dispatch("multiline", key("enter"), MULTILINE) == SUBMIT

    def test_shift_enter_adds_line(self) -> None:
        assert dispatch("multiline", key("shift+enter"), MULTILINE) == Action("mode", "soft_newline")


class TestReverseSearchMode:
    def test_characters_extend_query(self) -> None:
        assert dispatch("reverse-search", KeyEvent.char("a")) == Action("history", "search_append", "a")

    def test_named_space_extends_query(self) -> None:
        assert dispatch("reverse-search", KeyEvent.named("space")) == Action("history", "search_append", " ")

    def test_backspace_edits_query(self) -> None:
        assert dispatch("reverse-search", key("backspace")) == Action("history", "search_backspace")

    @pytest.mark.parametrize("key_id", ["ctrl+r", "up"])
    def test_older_match(self, key_id: str) -> None:
        assert dispatch("reverse-search", key(key_id)) == Action("history", "search_older")

    @pytest.mark.parametrize("key_id", ["ctrl+s", "down"])
    def test_newer_match(self, key_id: str) -> None:
        assert dispatch("reverse-search", key(key_id)) == Action("history", "search_newer")

    def test_enter_accepts(self) -> None:
        assert dispatch("reverse-search", key("enter")) == Action("mode", "accept_search")

    @pytest.mark.parametrize("key_id", ["escape", "ctrl+g"])
    def test_abort(self, key_id: str) -> None:
        assert dispatch("reverse-search", key(key_id)) == Action("mode", "abort_search")

    def test_editing_keys_are_noops(self) -> None:
        for key_id in ("left", "tab", "ctrl+l", "shift+enter"):
            assert dispatch("reverse-search", key(key_id)) == NOOP

    def test_cancel(self) -> None:
        assert dispatch("reverse-search", key("ctrl+c")) == CANCEL


class TestDispatchTotality:
    """Every event maps to some action in every mode."""

    EVENTS = [
        KeyEvent(),
        KeyEvent.char("z"),
        KeyEvent.char("z", ctrl=True, meta=True),
        KeyEvent.char("\x1b"),
        KeyEvent.named("f5"),
        KeyEvent(character="q", modifiers=Modifiers(shift=True), name="tab"),
    ] + [key(k) for k in ("enter", "tab", "up", "down", "escape", "ctrl+c", "shift+enter")]

    @pytest.mark.parametrize("mode", ["normal", "multiline", "reverse-search"])
    @pytest.mark.parametrize("context", [DispatchContext(), ACTIVE, MULTILINE])
    def test_always_returns_action(self, mode, context) -> None:
        for event in self.EVENTS:
            assert isinstance(dispatch(mode, event, context), Action)


class TestCustomKeybindings:
    def test_rebound_search(self) -> None:
        kb = KeybindingsManager({"historySearch": "ctrl+t"})
        assert dispatch("normal", key("ctrl+t"), keybindings=kb) == Action("mode", "enter_search")
        assert dispatch("normal", key("ctrl+r"), keybindings=kb) == NOOP
