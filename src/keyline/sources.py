"""Helpers for callers that build candidate lists.

The engine never filters candidates itself; these functions are what a
host application typically runs between key events before calling
``LineEngine.set_suggestions``.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from keyline.suggestions import Suggestion


def history_suggestions(
    history: Sequence[str],
    text: str,
    *,
    limit: int = 5,
    min_length: int = 2,
) -> list[Suggestion]:
    """History entries that extend *text*, newest first.

    Input shorter than *min_length* yields nothing, an entry equal to the
    input is not offered, and each distinct entry appears once.
    """
    if len(text) < min_length or limit <= 0:
        return []

    results: list[Suggestion] = []
    seen: set[str] = set()
    for entry in reversed(history):
        if entry == text or entry in seen or not entry.startswith(text):
            continue
        seen.add(entry)
        results.append(Suggestion(value=entry, description="From history", category="history"))
        if len(results) >= limit:
            break
    return results


def prefix_suggestions(candidates: Iterable[Suggestion], text: str) -> list[Suggestion]:
    """Case-insensitive prefix filter that keeps the caller's order."""
    prefix = text.lower()
    return [c for c in candidates if c.value.lower().startswith(prefix)]
