from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HistoryState:
    entries: tuple[str, ...] = ()
    index: int = -1

    @property
    def current(self) -> str | None:
        if 0 <= self.index < len(self.entries):
            return self.entries[self.index]
        return None

    @property
    def can_go_back(self) -> bool:
        return self.index > 0

    @property
    def can_go_forward(self) -> bool:
        return 0 <= self.index < len(self.entries) - 1


class NavigationHistory:
    """Browser-style back/forward stack of visited directories.

    Recording a path while the cursor is behind the newest entry drops every
    entry after the cursor first. Repeat visits are recorded again.
    """

    def __init__(self, *, limit: int | None = None) -> None:
        self._limit = limit
        self._state = HistoryState()

    @property
    def state(self) -> HistoryState:
        return self._state

    def record(self, path: str) -> HistoryState:
        entries = list(self._state.entries[: self._state.index + 1])
        entries.append(path)
        if self._limit is not None and len(entries) > self._limit:
            entries = entries[len(entries) - self._limit :]
        self._state = HistoryState(tuple(entries), len(entries) - 1)
        return self._state

    def peek(self, step: int, *, origin: int | None = None) -> tuple[int, str] | None:
        """Return the index and path ``step`` entries from ``origin`` without moving."""
        if self._state.index < 0:
            return None
        index = (self._state.index if origin is None else origin) + step
        if not 0 <= index < len(self._state.entries):
            return None
        return index, self._state.entries[index]

    def move_to(self, index: int) -> HistoryState:
        if not 0 <= index < len(self._state.entries):
            raise IndexError(f"history index {index} out of range")
        self._state = HistoryState(self._state.entries, index)
        return self._state

    def back(self) -> str | None:
        target = self.peek(-1)
        if target is None:
            return None
        return self.move_to(target[0]).current

    def forward(self) -> str | None:
        target = self.peek(1)
        if target is None:
            return None
        return self.move_to(target[0]).current
