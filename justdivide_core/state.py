from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board, Tile


@dataclass
class SessionState:
    """Everything one undo step restores. Best score and preferences live on the session."""
    board: Board = field(default_factory=Board)
    queue: List[Tile] = field(default_factory=list)
    keep: Optional[Tile] = None
    score: int = 0
    level: int = 1
    trash: int = 10
    game_over: bool = False
    elapsed_seconds: int = 0

    @property
    def active(self) -> Optional[Tile]:
        return self.queue[0] if self.queue else None

    def preview(self, n: int = 2) -> List[Tile]:
        return list(self.queue[1:1 + n])

    def clone(self) -> "SessionState":
        """Deep copy; later changes to either side never show through."""
        return SessionState(
            board=self.board.copy(),
            queue=list(self.queue),
            keep=self.keep,
            score=self.score,
            level=self.level,
            trash=self.trash,
            game_over=self.game_over,
            elapsed_seconds=self.elapsed_seconds,
        )
