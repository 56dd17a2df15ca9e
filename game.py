from __future__ import annotations

# Facade module that re-exports Just Divide core functionality.
# The Flask app, the CLI entry point and the tests import from here.
# Single-responsibility modules live under justdivide_core/*.

from justdivide_core.board import Board, Cell, Coord, Tile, DIRECTIONS
from justdivide_core.clock import GameClock, format_elapsed
from justdivide_core.config import BEST_SCORE_KEY, GameConfig
from justdivide_core.db import (
    BestScoreStore,
    MemoryBestScoreStore,
    _ensure_db_dir,
    _resolve_db_path,
    load_best_score,
    save_best_score,
)
from justdivide_core.errors import (
    EmptyUndoLog,
    GameIsOver,
    IsolatedPlacement,
    JustDivideError,
    NoTrashRemaining,
    OccupiedCell,
    OutOfBounds,
    PlacementError,
    SessionBusy,
    UnknownDifficulty,
)
from justdivide_core.merge import DIVIDE, EQUAL, MergeResult, MergeStep, resolve
from justdivide_core.rules import can_merge, hint_cells, is_terminal, legal_cells
from justdivide_core.scoring import LevelChange, level_change, level_for_score
from justdivide_core.session import Event, GameSession, Outcome, SessionView
from justdivide_core.state import SessionState
from justdivide_core.tiles import TILE_DOMAINS, Difficulty, TileSource
from justdivide_core.undo import MAX_UNDO, UndoLog


def main() -> None:
    # CLI driver delegated to justdivide_core.cli
    from justdivide_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
