"""Bounded, most-recent-first record of successful evaluations."""

from __future__ import annotations

from collections import deque
from typing import Iterator

from . import config
from .types import HistoryEntry


class History:
    """Keeps the latest ``capacity`` history entries, newest first."""

    def __init__(self, capacity: int | None = None):
        if capacity is None:
            capacity = config.HISTORY_SIZE
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: deque[HistoryEntry] = deque(maxlen=capacity)

    def add(self, expression: str, result: str) -> HistoryEntry:
        entry = HistoryEntry(expression, result)
        # appendleft on a full deque drops the oldest entry from the right
        self._entries.appendleft(entry)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"History(capacity={self.capacity}, entries={len(self)})"
