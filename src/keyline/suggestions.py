"""Completion candidates and the bounded selection over them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

# Display icon used when a candidate does not carry one
DEFAULT_ICONS: dict[str, str] = {
    "command": "⌘",
    "file": "\U0001f4c4",
    "directory": "\U0001f4c1",
    "history": "↺",
    "natural": "\U0001f527",
}


@dataclass(frozen=True)
class Suggestion:
    """A caller-supplied completion option.

    ``category`` is an open tag (``"command"``, ``"file"``, ...) used by
    renderers to pick an icon; the engine never branches on it.
    """

    value: str
    description: str | None = None
    category: str = "command"
    icon: str | None = None

    @property
    def display_icon(self) -> str:
        if self.icon:
            return self.icon
        return DEFAULT_ICONS.get(self.category, "")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Suggestion:
        """Build from a mapping; ``type`` is accepted as an alias of ``category``."""
        category = data.get("category") or data.get("type") or "command"
        return cls(
            value=str(data["value"]),
            description=data.get("description"),
            category=str(category),
            icon=data.get("icon"),
        )


SuggestionLike = Suggestion | Mapping[str, Any] | str


def to_suggestion(item: SuggestionLike) -> Suggestion:
    if isinstance(item, Suggestion):
        return item
    if isinstance(item, str):
        return Suggestion(value=item)
    return Suggestion.from_dict(item)


class SuggestionSelector:
    """Holds the candidate list and a clamped selection index.

    The selector is active exactly when it holds candidates. It does not
    filter: the caller passes an already ranked list.
    """

    def __init__(self, candidates: Iterable[SuggestionLike] = ()) -> None:
        self._candidates: tuple[Suggestion, ...] = ()
        self._selected_index = 0
        self.set_candidates(candidates)

    @property
    def candidates(self) -> tuple[Suggestion, ...]:
        return self._candidates

    @property
    def active(self) -> bool:
        return bool(self._candidates)

    @property
    def selected_index(self) -> int | None:
        return self._selected_index if self._candidates else None

    def set_candidates(self, candidates: Iterable[SuggestionLike]) -> None:
        """Replace the candidates.

        Re-supplying the same values keeps the selection; any other list
        selects its first entry.
        """
        new = tuple(to_suggestion(c) for c in candidates)
        if [c.value for c in new] != [c.value for c in self._candidates]:
            self._selected_index = 0
        self._candidates = new

    def set_selected_index(self, index: int) -> None:
        if self._candidates:
            self._selected_index = max(0, min(index, len(self._candidates) - 1))

    def dismiss(self) -> None:
        self.set_candidates(())

    def move_up(self) -> None:
        self.set_selected_index(self._selected_index - 1)

    def move_down(self) -> None:
        self.set_selected_index(self._selected_index + 1)

    def get_selected_item(self) -> Suggestion | None:
        if self._candidates:
            return self._candidates[self._selected_index]
        return None

    def accept(self, fallback: str) -> str:
        """Value to submit: the selected candidate's, or *fallback* when dormant."""
        selected = self.get_selected_item()
        return selected.value if selected is not None else fallback
