"""History browsing and incremental reverse search.

The caller owns the history entries (oldest first). The navigator only
keeps a cursor into them, the draft that was being edited before browsing
started, and the reverse-search query with its current match.
"""

from __future__ import annotations

from itertools import islice
from typing import Iterator, Sequence


class HistoryNavigator:
    """Walks caller-supplied history entries without modifying them.

    ``position`` is ``None`` while editing a fresh draft ("present"), or an
    offset counting back from the newest entry (``0`` = newest).
    """

    def __init__(
        self,
        entries: Sequence[str] = (),
        *,
        case_sensitive: bool = True,
    ) -> None:
        self._entries: tuple[str, ...] = tuple(entries)
        self.case_sensitive = case_sensitive

        self._position: int | None = None
        self._draft: str = ""

        # Reverse search state
        self._searching = False
        self._search_query = ""
        self._search_index = 0
        self._search_snapshot = ""
        self._match_cache: list[str] | None = None

    # -- Entries -------------------------------------------------------------

    @property
    def entries(self) -> tuple[str, ...]:
        return self._entries

    def set_entries(self, entries: Sequence[str]) -> None:
        """Replace the history snapshot and stop browsing."""
        self._entries = tuple(entries)
        self.reset()
        self._match_cache = None
        self._search_index = 0

    # -- Browsing ------------------------------------------------------------

    @property
    def position(self) -> int | None:
        return self._position

    @property
    def is_browsing(self) -> bool:
        return self._position is not None

    @property
    def draft(self) -> str:
        return self._draft

    def _entry_at(self, offset: int) -> str:
        return self._entries[len(self._entries) - 1 - offset]

    def older(self, current_text: str) -> str | None:
        """Step one entry into the past.

        Returns the text the buffer should show, or ``None`` when already
        at the oldest entry (or there is no history).
        """
        if not self._entries:
            return None
        if self._position is None:
            self._draft = current_text
            self._position = 0
            return self._entry_at(0)
        if self._position >= len(self._entries) - 1:
            return None
        self._position += 1
        return self._entry_at(self._position)

    def newer(self) -> str | None:
        """Step one entry toward the present.

        From the newest entry this restores the draft. Returns ``None``
        when not browsing.
        """
        if self._position is None:
            return None
        if self._position == 0:
            self._position = None
            draft, self._draft = self._draft, ""
            return draft
        self._position -= 1
        return self._entry_at(self._position)

    def reset(self) -> None:
        """Return to the present and forget the draft."""
        self._position = None
        self._draft = ""

    # -- Reverse search ------------------------------------------------------

    @property
    def searching(self) -> bool:
        return self._searching

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def search_snapshot(self) -> str:
        """Buffer content captured when the search started."""
        return self._search_snapshot

    def _contains(self, entry: str, query: str) -> bool:
        if self.case_sensitive:
            return query in entry
        return query.casefold() in entry.casefold()

    def iter_matches(self) -> Iterator[str]:
        """Yield distinct entries containing the query, newest first."""
        seen: set[str] = set()
        for entry in reversed(self._entries):
            if entry in seen or not self._contains(entry, self._search_query):
                continue
            seen.add(entry)
            yield entry

    @property
    def search_matches(self) -> list[str]:
        """Matches examined so far, extended on demand up to the current one."""
        if self._match_cache is None:
            self._match_cache = list(islice(self.iter_matches(), self._search_index + 1))
        return self._match_cache

    @property
    def current_match(self) -> str | None:
        if not self._searching or not self._search_query:
            return None
        matches = self.search_matches
        if self._search_index < len(matches):
            return matches[self._search_index]
        return None

    @property
    def search_failed(self) -> bool:
        return self._searching and bool(self._search_query) and self.current_match is None

    def enter_search(self, current_text: str) -> None:
        self._searching = True
        self._search_query = ""
        self._search_index = 0
        self._search_snapshot = current_text
        self._match_cache = None

    def exit_search(self, accept: bool) -> str:
        """Leave search mode and return the text the buffer should hold.

        Accepting yields the current match (or the snapshot when nothing
        matched); aborting always yields the snapshot.
        """
        match = self.current_match
        result = match if accept and match is not None else self._search_snapshot
        self._searching = False
        self._search_query = ""
        self._search_index = 0
        self._search_snapshot = ""
        self._match_cache = None
        return result

    def _set_query(self, query: str) -> None:
        self._search_query = query
        self._search_index = 0
        self._match_cache = None

    def search_append(self, text: str) -> None:
        if self._searching and text:
            self._set_query(self._search_query + text)

    def search_backspace(self) -> None:
        if self._searching and self._search_query:
            self._set_query(self._search_query[:-1])

    def search_older(self) -> None:
        """Move to the next older match; holds at the oldest one."""
        if not self._searching or not self._search_query:
            return
        next_index = self._search_index + 1
        matches = self.search_matches
        if next_index >= len(matches):
            self._match_cache = list(islice(self.iter_matches(), next_index + 1))
            if next_index >= len(self._match_cache):
                return
        self._search_index = next_index

    def search_newer(self) -> None:
        if self._searching and self._search_index > 0:
            self._search_index -= 1
