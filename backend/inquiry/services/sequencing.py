"""Per-session search tickets so a slow response cannot overwrite a newer one."""

from __future__ import annotations

from collections import OrderedDict
from itertools import count

from inquiry.core.config import settings
from inquiry.core.errors import StaleSearchError


class SearchSequencer:
    """Hands out increasing tickets and remembers the latest one per session key.

    Session keys come from clients, so at most ``max_sessions`` are tracked;
    the least recently used ones are forgotten first. An in-flight search of a
    forgotten session is treated as stale. Only the event loop touches this
    object, so no locks are needed.
    """

    def __init__(self, max_sessions: int | None = None) -> None:
        self.max_sessions = max_sessions or settings.SEARCH_SESSIONS_MAX
        # One process-wide counter keeps tickets increasing even across evictions
        self._tickets = count(1)
        self._latest: OrderedDict[str, int] = OrderedDict()

    def __len__(self) -> int:
        return len(self._latest)

    def begin(self, session_key: str) -> int:
        ticket = next(self._tickets)
        self._latest[session_key] = ticket
        self._latest.move_to_end(session_key)
        while len(self._latest) > self.max_sessions:
            self._latest.popitem(last=False)
        return ticket

    def is_current(self, session_key: str, ticket: int) -> bool:
        return self._latest.get(session_key) == ticket

    def ensure_current(self, session_key: str, ticket: int) -> None:
        if not self.is_current(session_key, ticket):
            raise StaleSearchError(session_key, ticket, self._latest.get(session_key, ticket))

    def reset(self) -> None:
        self._tickets = count(1)
        self._latest.clear()


search_sequencer = SearchSequencer()
