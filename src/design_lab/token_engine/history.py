"""Bounded, newest-first log of applied configurations."""

from typing import Iterator, List, Optional
import logging

from .schema import HistoryEntry

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10


class ConfigurationHistory:
    """Most recent configurations, newest at index 0.

    Entries are only removed by capacity eviction; the oldest entry is
    dropped once the log exceeds its capacity.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._entries: List[HistoryEntry] = []

    def record(self, entry: HistoryEntry) -> None:
        """Add an entry as the newest, evicting the oldest beyond capacity."""
        self._entries.insert(0, entry)
        if len(self._entries) > self.capacity:
            evicted = self._entries.pop()
            logger.debug(f"History full, evicted entry from {evicted.timestamp}")

    def restore(self, index: int) -> HistoryEntry:
        """Return the stored entry at ``index`` unchanged.

        Raises:
            IndexError: If no entry exists at that index
        """
        if index < 0 or index >= len(self._entries):
            raise IndexError(f"No history entry at index {index} (have {len(self._entries)})")
        return self._entries[index]

    @property
    def latest(self) -> Optional[HistoryEntry]:
        return self._entries[0] if self._entries else None

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))
