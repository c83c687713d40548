"""Mode controller: how the next key event is interpreted."""

from __future__ import annotations

import logging
from typing import Literal

from keyline.buffer import LINE_SEPARATOR

logger = logging.getLogger(__name__)

Mode = Literal["normal", "multiline", "reverse-search"]


class ModeController:
    """Tracks the engine mode and validates transitions.

    Editing modes (``normal`` and ``multiline``) follow the buffer: the
    controller is ``multiline`` exactly when multiline composition is
    enabled and the buffer holds a line separator. Reverse search is
    entered and left explicitly; leaving it, like a reset, lands in
    ``normal`` until the next edit re-derives the mode.
    """

    def __init__(self, *, multiline_enabled: bool = False) -> None:
        self.multiline_enabled = multiline_enabled
        self._mode: Mode = "normal"

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def is_searching(self) -> bool:
        return self._mode == "reverse-search"

    def _transition(self, mode: Mode) -> None:
        if mode != self._mode:
            logger.debug("mode %s -> %s", self._mode, mode)
            self._mode = mode

    def editing_mode_for(self, text: str) -> Mode:
        if self.multiline_enabled and LINE_SEPARATOR in text:
            return "multiline"
        return "normal"

    def sync(self, text: str) -> None:
        """Re-derive the editing mode from the buffer content."""
        if not self.is_searching:
            self._transition(self.editing_mode_for(text))

    def soft_newline(self) -> bool:
        """Enter multiline composition. Returns ``False`` when disabled."""
        if not self.multiline_enabled or self.is_searching:
            return False
        self._transition("multiline")
        return True

    def enter_search(self) -> bool:
        if self.is_searching:
            return False
        self._transition("reverse-search")
        return True

    def exit_search(self) -> None:
        """Leave reverse search. Accept and abort both land in ``normal``."""
        if self.is_searching:
            self._transition("normal")

    def reset(self) -> None:
        self._transition("normal")
