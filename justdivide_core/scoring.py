from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import GameConfig


def level_for_score(score: int, points_per_level: int = 10) -> int:
    """Level 1 at score 0, one more level for every `points_per_level` points."""
    return score // points_per_level + 1


@dataclass(frozen=True)
class LevelChange:
    old_level: int
    new_level: int
    trash_bonus: int
    milestone: bool

    @property
    def gained(self) -> int:
        return self.new_level - self.old_level

    @property
    def message(self) -> str:
        if self.milestone:
            return f"Level {self.new_level}! Game getting harder!"
        return f"Level {self.new_level}! +{self.trash_bonus} trash"


def level_change(old_level: int, score: int, config: Optional[GameConfig] = None) -> Optional[LevelChange]:
    """Return the level-up caused by reaching `score`, or None if the level did not rise."""
    cfg = config or GameConfig()
    new_level = level_for_score(score, cfg.points_per_level)
    if new_level <= old_level:
        return None
    return LevelChange(
        old_level=old_level,
        new_level=new_level,
        trash_bonus=cfg.trash_per_level * (new_level - old_level),
        milestone=new_level % cfg.milestone_every == 0,
    )
