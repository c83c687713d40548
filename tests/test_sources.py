"""Tests for keyline.sources -- caller-side candidate helpers."""

from __future__ import annotations

from keyline.sources import history_suggestions, prefix_suggestions
from keyline.suggestions import Suggestion

HISTORY = [
    "implement user authentication system",
    "add new features",
    "fix authentication bug in login",
    "implement user authentication system",
    "implement latest authentication feature",
]


class TestHistorySuggestions:
    def test_prefix_match_newest_first(self) -> None:
        values = [s.value for s in history_suggestions(HISTORY, "implement")]
        assert values == [
            "implement latest authentication feature",
            "implement user authentication system",
        ]

    def test_category_is_history(self) -> None:
        (first, *_) = history_suggestions(HISTORY, "fix")
        assert first.category == "history"
        assert first.description == "From history"

    def test_single_character_gives_nothing(self) -> None:
        assert history_suggestions(HISTORY, "i") == []

    def test_empty_input_gives_nothing(self) -> None:
        assert history_suggestions(HISTORY, "") == []

    def test_exact_match_excluded(self) -> None:
        assert history_suggestions(HISTORY, "add new features") == []

    def test_limit(self) -> None:
        history = [f"cmd {i}" for i in range(20)]
        assert len(history_suggestions(history, "cmd")) == 5
        assert len(history_suggestions(history, "cmd", limit=2)) == 2

    def test_empty_history(self) -> None:
        assert history_suggestions([], "implement") == []


class TestPrefixSuggestions:
    def test_case_insensitive_prefix(self) -> None:
        candidates = [Suggestion("/Status"), Suggestion("/start"), Suggestion("/help")]
        values = [s.value for s in prefix_suggestions(candidates, "/st")]
        assert values == ["/Status", "/start"]

    def test_empty_text_keeps_everything(self) -> None:
        candidates = [Suggestion("b"), Suggestion("a")]
        assert prefix_suggestions(candidates, "") == candidates
