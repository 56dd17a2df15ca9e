from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Optional, TypeVar

from .errors import EmptyUndoLog

MAX_UNDO = 10

T = TypeVar("T")


class UndoLog(Generic[T]):
    """Bounded stack of pre-action snapshots. The oldest entry is dropped at capacity."""

    def __init__(self, max_depth: int = MAX_UNDO):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self._entries: Deque[T] = deque(maxlen=max_depth)

    def push(self, snapshot: T) -> None:
        self._entries.append(snapshot)

    def pop(self) -> T:
        if not self._entries:
            raise EmptyUndoLog()
        return self._entries.pop()

    def peek(self) -> Optional[T]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
