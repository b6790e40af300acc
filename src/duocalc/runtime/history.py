"""
Bounded log of accepted command lines.
"""

from typing import Iterable, Iterator, List

HISTORY_CAPACITY = 10


class History:
    """Insertion-ordered command log that evicts the oldest entry past capacity."""

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: List[str] = []

    @classmethod
    def from_entries(cls, entries: Iterable[str], capacity: int = HISTORY_CAPACITY) -> "History":
        """Rebuild a history, keeping only the most recent `capacity` entries."""
        history = cls(capacity)
        for entry in entries:
            history.record(entry)
        return history

    def record(self, line: str) -> None:
        self._entries.append(line)
        if len(self._entries) > self.capacity:
            del self._entries[0]

    def snapshot(self) -> List[str]:
        """Copy of the entries, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())
