from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

BEST_SCORE_KEY = "jd_best_score"


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants for one session. Defaults match the published game."""
    grid_size: int = 4
    max_undo: int = 10
    starting_trash: int = 10
    initial_queue: int = 20
    refill_size: int = 10
    preview_size: int = 2
    points_per_level: int = 10
    trash_per_level: int = 2
    milestone_every: int = 5
    difficulty: str = "medium"

    @classmethod
    def from_env(cls, base: Optional["GameConfig"] = None) -> "GameConfig":
        """Apply JUSTDIVIDE_DIFFICULTY / JUSTDIVIDE_MAX_UNDO overrides on top of `base`."""
        cfg = base or cls()
        difficulty = os.getenv("JUSTDIVIDE_DIFFICULTY")
        if difficulty:
            cfg = replace(cfg, difficulty=difficulty.strip().lower())
        max_undo = os.getenv("JUSTDIVIDE_MAX_UNDO")
        if max_undo:
            try:
                value = int(max_undo)
            except ValueError:
                raise ValueError(f"JUSTDIVIDE_MAX_UNDO must be an integer, got {max_undo!r}")
            if value < 1:
                raise ValueError("JUSTDIVIDE_MAX_UNDO must be at least 1")
            cfg = replace(cfg, max_undo=value)
        return cfg
