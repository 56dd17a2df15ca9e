from __future__ import annotations

import random
from enum import Enum
from typing import Dict, List, MutableSequence, Optional, Tuple, Union

from .board import Tile
from .errors import UnknownDifficulty


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        """Accepts a Difficulty, its name, or the keyboard shortcut '1'/'2'/'3'."""
        if isinstance(value, Difficulty):
            return value
        text = str(value).strip().lower()
        text = _SHORTCUTS.get(text, text)
        try:
            return cls(text)
        except ValueError:
            raise UnknownDifficulty(f"Unknown difficulty: {value!r}", context={"value": str(value)})

    @property
    def values(self) -> Tuple[Tile, ...]:
        return TILE_DOMAINS[self]


_SHORTCUTS = {"1": "easy", "2": "medium", "3": "hard"}

TILE_DOMAINS: Dict[Difficulty, Tuple[Tile, ...]] = {
    # Smaller, highly composite numbers.
    Difficulty.EASY: (2, 3, 4, 6, 8, 9, 12, 15, 16, 18, 20),
    Difficulty.MEDIUM: (2, 3, 4, 5, 6, 8, 9, 10, 12, 15, 18, 20, 24, 30),
    # Larger values with a few primes mixed in.
    Difficulty.HARD: (5, 7, 10, 11, 13, 15, 18, 20, 24, 25, 30, 32, 35),
}


class TileSource:
    """Draws tile values uniformly from the active difficulty's domain."""

    def __init__(self, difficulty: Union[str, Difficulty] = Difficulty.MEDIUM, seed: Optional[int] = None):
        self.difficulty = Difficulty.parse(difficulty)
        self.rng = random.Random(seed)

    def set_difficulty(self, difficulty: Union[str, Difficulty]) -> Difficulty:
        # Values already queued are left alone; only later draws change.
        self.difficulty = Difficulty.parse(difficulty)
        return self.difficulty

    def next(self) -> Tile:
        return self.rng.choice(self.difficulty.values)

    def draw(self, n: int) -> List[Tile]:
        return [self.next() for _ in range(n)]

    def ensure_lookahead(self, queue: MutableSequence[Tile], min_size: int) -> int:
        """Append draws until len(queue) >= min_size. Returns how many were added."""
        added = 0
        while len(queue) < min_size:
            queue.append(self.next())
            added += 1
        return added
