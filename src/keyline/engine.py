"""Line engine: turns key events into buffer edits, history moves and submissions.

Each key event is dispatched to exactly one action. Submitting empties the
buffer (reported through ``on_change``) before ``on_submit`` runs, so a
callback that raises still leaves the engine ready for the next line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Sequence

from keyline.buffer import LINE_SEPARATOR, EditorBuffer
from keyline.dispatch import Action, DispatchContext, dispatch
from keyline.history import HistoryNavigator
from keyline.keybindings import KeybindingsManager
from keyline.keys import KeyEvent
from keyline.mode import Mode, ModeController
from keyline.settings import EngineSettings
from keyline.suggestions import Suggestion, SuggestionLike, SuggestionSelector
from keyline.text import visible_width

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderState:
    """Read-only snapshot handed to the rendering collaborator."""

    display_text: str
    cursor_index: int
    mode: Mode
    suggestions_visible: bool
    suggestions: tuple[Suggestion, ...]
    selected_suggestion_index: int | None
    search_prompt_text: str | None
    line_count: int
    cursor_line: int
    cursor_column: int
    search_failed: bool = False


def _cursor_position(text: str, cursor: int) -> tuple[int, int]:
    """Return (line index, terminal cell column) of *cursor* within *text*."""
    line = text.count(LINE_SEPARATOR, 0, cursor)
    line_start = text.rfind(LINE_SEPARATOR, 0, cursor) + 1
    return line, visible_width(text[line_start:cursor])


class LineEngine:
    """Interactive line editor state machine.

    Owns a buffer, a history cursor, a suggestion selection and a mode.
    History entries and suggestions belong to the caller, who may replace
    them between key events with :meth:`set_history` and
    :meth:`set_suggestions`.
    """

    def __init__(
        self,
        *,
        value: str = "",
        history: Sequence[str] = (),
        suggestions: Iterable[SuggestionLike] = (),
        multiline: bool | None = None,
        settings: EngineSettings | None = None,
        keybindings: KeybindingsManager | None = None,
        on_change: Callable[[str], None] | None = None,
        on_submit: Callable[[str], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        if multiline is not None:
            self.settings = replace(self.settings, multiline=multiline)

        # Per-engine bindings, independent of the global manager
        if keybindings is None:
            keybindings = KeybindingsManager(self.settings.keybindings)
        self._keybindings = keybindings

        # Public callbacks
        self.on_change = on_change
        self.on_submit = on_submit
        self.on_cancel = on_cancel

        self._buffer = EditorBuffer(value, on_change=self._notify_change)
        self._history = HistoryNavigator(
            history, case_sensitive=self.settings.case_sensitive_search
        )
        self._suggestions = SuggestionSelector(suggestions)
        self._mode = ModeController(multiline_enabled=self.settings.multiline)
        self._mode.sync(value)

    # -- Accessors -----------------------------------------------------------

    @property
    def value(self) -> str:
        return self._buffer.text

    @property
    def cursor(self) -> int:
        return self._buffer.cursor

    @property
    def mode(self) -> Mode:
        return self._mode.mode

    @property
    def buffer(self) -> EditorBuffer:
        return self._buffer

    @property
    def history(self) -> HistoryNavigator:
        return self._history

    @property
    def suggestions(self) -> SuggestionSelector:
        return self._suggestions

    # -- Caller-driven updates -----------------------------------------------

    def set_history(self, entries: Sequence[str]) -> None:
        self._history.set_entries(entries)

    def set_suggestions(self, candidates: Iterable[SuggestionLike]) -> None:
        self._suggestions.set_candidates(candidates)

    def set_value(self, value: str) -> None:
        """Replace the buffer content programmatically."""
        self._history.reset()
        self._buffer.set_whole(value)
        self._mode.sync(value)

    # -- Input handling ------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> Action:
        """Process one key event to completion and return the action taken."""
        action = dispatch(self._mode.mode, event, self._context(), self._keybindings)
        self._apply(action)
        return action

    def run(self, events: Iterable[KeyEvent]) -> None:
        """Feed every event from *events* through :meth:`handle_key`."""
        for event in events:
            self.handle_key(event)

    def _context(self) -> DispatchContext:
        return DispatchContext(
            suggestions_active=self._suggestions.active,
            multiline_enabled=self._mode.multiline_enabled,
            on_first_line=self._buffer.cursor_line == 0,
            on_last_line=self._buffer.cursor_line == self._buffer.line_count - 1,
        )

    def _apply(self, action: Action) -> None:
        if action.kind == "edit":
            self._apply_edit(action)
        elif action.kind == "mode":
            self._apply_mode(action)
        elif action.kind == "history":
            self._apply_history(action)
        elif action.kind == "suggestion":
            self._apply_suggestion(action)
        elif action.kind == "submit":
            self._submit(self._buffer.text)
        elif action.kind == "cancel":
            self._cancel()

    def _apply_edit(self, action: Action) -> None:
        before = self._buffer.text
        if action.op == "insert":
            self._buffer.insert(action.text or "")
        else:
            getattr(self._buffer, action.op)()
        if self._buffer.text != before:
            # Editing a recalled entry turns it into the new draft
            self._history.reset()
            self._mode.sync(self._buffer.text)

    def _apply_mode(self, action: Action) -> None:
        if action.op == "soft_newline":
            if self._mode.soft_newline():
                self._history.reset()
                self._buffer.insert(LINE_SEPARATOR)
        elif action.op == "enter_search":
            if self._mode.enter_search():
                self._history.enter_search(self._buffer.text)
        elif action.op in ("accept_search", "abort_search"):
            accept = action.op == "accept_search"
            text = self._history.exit_search(accept)
            if accept:
                self._history.reset()
            self._buffer.set_whole(text)
            self._mode.exit_search()

    def _apply_history(self, action: Action) -> None:
        if action.op == "older":
            text = self._history.older(self._buffer.text)
        elif action.op == "newer":
            text = self._history.newer()
        else:
            op: Callable[..., None] = getattr(self._history, action.op)
            if action.text is not None:
                op(action.text)
            else:
                op()
            return
        if text is not None:
            self._buffer.set_whole(text)
            self._mode.sync(text)

    def _apply_suggestion(self, action: Action) -> None:
        if action.op == "move_up":
            self._suggestions.move_up()
        elif action.op == "move_down":
            self._suggestions.move_down()
        elif action.op == "dismiss":
            self._suggestions.dismiss()
        elif action.op in ("accept_and_continue", "accept_via_submit"):
            self._submit(self._suggestions.accept(self._buffer.text))

    # -- Terminal actions ----------------------------------------------------

    def _notify_change(self, text: str) -> None:
        if self.on_change:
            self.on_change(text)

    def _submit(self, value: str) -> None:
        logger.debug("submit (%d chars, %d lines)", len(value), value.count(LINE_SEPARATOR) + 1)
        self._buffer.clear()
        self._history.reset()
        self._suggestions.dismiss()
        self._mode.reset()
        if self.on_submit:
            self.on_submit(value)

    def _cancel(self) -> None:
        logger.debug("cancel in %s mode", self._mode.mode)
        if self._history.searching:
            self._history.exit_search(False)
        self._history.reset()
        if self.settings.clear_on_cancel:
            self._buffer.clear()
        self._mode.reset()
        if self.on_cancel:
            self.on_cancel()

    # -- Rendering -----------------------------------------------------------

    def render_state(self) -> RenderState:
        search_prompt: str | None = None
        search_failed = False
        if self._mode.is_searching:
            match = self._history.current_match
            search_failed = self._history.search_failed
            query = self._history.search_query
            display_text = match if match is not None else self._history.search_snapshot
            found = display_text.find(query) if match is not None and query else -1
            if found < 0 and match is not None and query:
                found = display_text.casefold().find(query.casefold())
            cursor_index = found if found >= 0 else len(display_text)
            label = "failed reverse-i-search" if search_failed else "reverse-i-search"
            search_prompt = f"({label})`{query}': "
        else:
            display_text = self._buffer.text
            cursor_index = self._buffer.cursor

        cursor_line, cursor_column = _cursor_position(display_text, cursor_index)
        return RenderState(
            display_text=display_text,
            cursor_index=cursor_index,
            mode=self._mode.mode,
            suggestions_visible=self._suggestions.active,
            suggestions=self._suggestions.candidates,
            selected_suggestion_index=self._suggestions.selected_index,
            search_prompt_text=search_prompt,
            line_count=display_text.count(LINE_SEPARATOR) + 1,
            cursor_line=cursor_line,
            cursor_column=cursor_column,
            search_failed=search_failed,
        )
