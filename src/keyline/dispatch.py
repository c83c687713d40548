"""Dispatch table: (mode, key event) -> action.

``dispatch`` is a pure function. It never mutates engine state; the engine
applies the returned :class:`Action`. Every key event maps to some action
in every mode, with :data:`NOOP` for anything unbound.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from keyline.keybindings import KeybindingsManager, get_keybindings
from keyline.keys import Key, KeyEvent
from keyline.mode import Mode

ActionKind = Literal["edit", "mode", "history", "suggestion", "submit", "cancel", "noop"]


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    op: str = ""
    text: str | None = None


NOOP = Action("noop")
SUBMIT = Action("submit")
CANCEL = Action("cancel")


@dataclass(frozen=True)
class DispatchContext:
    """The slice of engine state the dispatch table may look at."""

    suggestions_active: bool = False
    multiline_enabled: bool = False
    on_first_line: bool = True
    on_last_line: bool = True


# Plain editing bindings shared by normal and multiline modes, checked in order
_EDIT_BINDINGS: tuple[tuple[str, str], ...] = (
    ("clear", "clear"),
    ("deleteToLineStart", "delete_to_line_start"),
    ("deleteToLineEnd", "delete_to_line_end"),
    ("deleteWordBackward", "delete_word_backward"),
    ("deleteCharBackward", "delete_backward"),
    ("deleteCharForward", "delete_forward"),
    ("cursorLineStart", "move_line_start"),
    ("cursorLineEnd", "move_line_end"),
    ("cursorLeft", "move_left"),
    ("cursorRight", "move_right"),
)


def _insertable_text(event: KeyEvent, multiline_enabled: bool) -> str:
    """Strip control characters from character input.

    Tabs become four spaces. Line breaks survive only when multiline
    composition is enabled; otherwise they become spaces.
    """
    text = (event.character or "").replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\t", "    ")
    if not multiline_enabled:
        text = text.replace("\n", " ")
    return "".join(ch for ch in text if ch == "\n" or ord(ch) >= 32)


def _typed_text(event: KeyEvent, multiline_enabled: bool) -> str:
    """Text a key event types, or an empty string."""
    if event.name == Key.space and not (event.ctrl or event.meta):
        return " "
    if event.is_printable:
        return _insertable_text(event, multiline_enabled)
    return ""


def dispatch(
    mode: Mode,
    event: KeyEvent,
    context: DispatchContext | None = None,
    keybindings: KeybindingsManager | None = None,
) -> Action:
    """Map a key event to the action it triggers in *mode*."""
    ctx = context or DispatchContext()
    kb = keybindings or get_keybindings()

    # Cancel wins in every mode
    if kb.matches(event, "cancel"):
        return CANCEL

    if mode == "reverse-search":
        return _dispatch_search(event, kb)
    return _dispatch_editing(mode, event, ctx, kb)


def _dispatch_search(event: KeyEvent, kb: KeybindingsManager) -> Action:
    if kb.matches(event, "searchAccept"):
        return Action("mode", "accept_search")
    if kb.matches(event, "searchAbort"):
        return Action("mode", "abort_search")
    if kb.matches(event, "searchOlder"):
        return Action("history", "search_older")
    if kb.matches(event, "searchNewer"):
        return Action("history", "search_newer")
    if kb.matches(event, "deleteCharBackward"):
        return Action("history", "search_backspace")
    text = _typed_text(event, multiline_enabled=False)
    if text:
        return Action("history", "search_append", text)
    return NOOP


def _dispatch_editing(  # noqa: C901
    mode: Mode,
    event: KeyEvent,
    ctx: DispatchContext,
    kb: KeybindingsManager,
) -> Action:
    # Suggestion panel takes navigation and acceptance keys while visible
    if ctx.suggestions_active:
        if kb.matches(event, "selectUp"):
            return Action("suggestion", "move_up")
        if kb.matches(event, "selectDown"):
            return Action("suggestion", "move_down")
        if kb.matches(event, "tab"):
            return Action("suggestion", "accept_and_continue")
        if kb.matches(event, "submit"):
            return Action("suggestion", "accept_via_submit")
        if kb.matches(event, "selectCancel"):
            return Action("suggestion", "dismiss")

    # Soft newline before submit: shift+enter must never submit
    if kb.matches(event, "newLine"):
        if ctx.multiline_enabled:
            return Action("mode", "soft_newline")
        return NOOP

    if kb.matches(event, "submit"):
        return SUBMIT

    if kb.matches(event, "tab"):
        return NOOP

    for binding, op in _EDIT_BINDINGS:
        if kb.matches(event, binding):
            return Action("edit", op)

    if kb.matches(event, "historySearch"):
        return Action("mode", "enter_search")

    # Up/down walk lines inside a multiline buffer before reaching history
    if mode == "multiline":
        if kb.matches(event, "cursorUp") and not ctx.on_first_line:
            return Action("edit", "move_up")
        if kb.matches(event, "cursorDown") and not ctx.on_last_line:
            return Action("edit", "move_down")

    if kb.matches(event, "historyOlder"):
        return Action("history", "older")
    if kb.matches(event, "historyNewer"):
        return Action("history", "newer")

    text = _typed_text(event, ctx.multiline_enabled)
    if text:
        return Action("edit", "insert", text)

    return NOOP
