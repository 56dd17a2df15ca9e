from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .board import Board, Cell, Coord, Tile
from .clock import GameClock
from .config import GameConfig
from .db import MemoryBestScoreStore
from .errors import GameIsOver, NoTrashRemaining, SessionBusy
from .merge import MergeResult, resolve
from .rules import hint_cells, is_terminal
from .scoring import level_change
from .state import SessionState
from .tiles import Difficulty, TileSource
from .undo import UndoLog

logger = logging.getLogger(__name__)

GAME_OVER_MESSAGE = "Game Over! No more valid merges."


@dataclass(frozen=True)
class Event:
    kind: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Outcome:
    """What a successful action reports back to the caller."""
    action: str
    message: str
    events: List[Event] = field(default_factory=list)
    merge: Optional[MergeResult] = None
    game_over: bool = False

    @property
    def points(self) -> int:
        return self.merge.points if self.merge is not None else 0


@dataclass(frozen=True)
class SessionView:
    """Read-only picture of a session for renderers."""
    grid: List[List[Cell]]
    keep: Optional[Tile]
    active: Optional[Tile]
    preview: List[Tile]
    queue_length: int
    score: int
    best_score: int
    level: int
    trash: int
    game_over: bool
    elapsed_seconds: int
    difficulty: str
    hints_on: bool
    hints: List[Coord]
    undo_depth: int


class GameSession:
    """
    One player's game: owns the live state, the undo history, the tile source
    and the clock, and exposes one method per player action.

    Actions either complete fully or raise a JustDivideError before touching
    anything. Only one action may run at a time; starting another from inside
    an event listener raises SessionBusy.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Any = None,
        seed: Optional[int] = None,
        difficulty: Union[str, Difficulty, None] = None,
        listener: Optional[Callable[[Event], None]] = None,
        state: Optional[SessionState] = None,
    ):
        self.config = config or GameConfig()
        self.tiles = TileSource(difficulty or self.config.difficulty, seed=seed)
        self.store = store if store is not None else MemoryBestScoreStore()
        self.best_score = self._load_best()
        self.history: UndoLog[SessionState] = UndoLog(self.config.max_undo)
        self.clock = GameClock()
        self.listener = listener
        self.hints_on = False
        self._busy = False
        self._events: List[Event] = []
        if state is None:
            self.state = self._fresh_state()
        else:
            self.state = state
            self.clock.elapsed_seconds = state.elapsed_seconds
            if state.game_over:
                self.clock.pause()
            self._refill()

    # ---------- internals ----------

    def _fresh_state(self) -> SessionState:
        size = self.config.grid_size
        return SessionState(
            board=Board(size=size),
            queue=self.tiles.draw(self.config.initial_queue),
            keep=None,
            score=0,
            level=1,
            trash=self.config.starting_trash,
            game_over=False,
            elapsed_seconds=0,
        )

    @contextmanager
    def _exclusive(self, action: str) -> Iterator[None]:
        if self._busy:
            raise SessionBusy(context={"action": action})
        self._busy = True
        self._events = []
        try:
            yield
        finally:
            self._busy = False

    def _load_best(self) -> int:
        try:
            return int(self.store.load_best_score())
        except Exception:
            logger.exception("failed to load best score, starting from 0")
            return 0

    def _emit(self, kind: str, message: str, **data: Any) -> None:
        self._events.append(Event(kind, message, data))

    def _finish(self, action: str, message: str, merge: Optional[MergeResult] = None) -> Outcome:
        # Listeners see events only once the state change is complete. The
        # action is already applied, so a failing listener cannot abort it.
        events = list(self._events)
        if self.listener is not None:
            for ev in events:
                try:
                    self.listener(ev)
                except Exception:
                    logger.exception("event listener failed on %s", ev.kind)
        return Outcome(action=action, message=message, events=events, merge=merge,
                       game_over=self.state.game_over)

    def _require_active(self) -> None:
        if self.state.game_over:
            raise GameIsOver()

    def _refill(self) -> None:
        if not self.state.queue:
            self.tiles.ensure_lookahead(self.state.queue, self.config.refill_size)

    def _head(self) -> Tile:
        self._refill()
        return self.state.queue[0]

    def _apply_level(self) -> None:
        st = self.state
        change = level_change(st.level, st.score, self.config)
        if change is None:
            return
        st.level = change.new_level
        st.trash += change.trash_bonus
        self._emit("level_up", change.message, level=change.new_level, trash_bonus=change.trash_bonus)
        if change.milestone:
            logger.info("difficulty milestone reached at level %d", change.new_level)
            self._emit("milestone", change.message, level=change.new_level)

    def _update_best(self) -> None:
        score = self.state.score
        if score <= self.best_score:
            return
        self.best_score = score
        try:
            self.store.save_best_score(score)
        except Exception:
            logger.exception("failed to persist best score %d", score)
        self._emit("best_score", f"New best score: {score}", best=score)

    def _end_game(self) -> None:
        self.state.game_over = True
        self.clock.pause()
        logger.info("game over: score=%d level=%d", self.state.score, self.state.level)
        self._emit("game_over", GAME_OVER_MESSAGE, score=self.state.score)

    # ---------- turn actions ----------

    def place_active(self, r: int, c: int) -> Outcome:
        """Drop the queue head on (r, c) and resolve the merge cascade from there."""
        with self._exclusive("place"):
            self._require_active()
            st = self.state
            st.board.check_placement(r, c)
            self._head()

            self.history.push(self.snapshot())
            value = st.queue.pop(0)
            st.board.place(r, c, value)
            merge = resolve(st.board, r, c)
            for step in merge.steps:
                self._emit("merge", step.message, rule=step.kind, points=step.points)
            st.score += merge.points
            self._apply_level()
            self._refill()
            self._update_best()

            if is_terminal(st.board):
                self._end_game()
                message = GAME_OVER_MESSAGE
            elif merge.steps:
                message = merge.steps[-1].message
            else:
                message = "Good move. Keep going!"
            return self._finish("place", message, merge)

    def keep_active(self) -> Outcome:
        """Park the queue head in the keep slot, swapping with whatever is already there."""
        with self._exclusive("keep"):
            self._require_active()
            st = self.state
            head = self._head()
            self.history.push(self.snapshot())
            if st.keep is None:
                st.keep = st.queue.pop(0)
                self._refill()
            else:
                st.keep, st.queue[0] = head, st.keep
            self._emit("keep", "Tile stored in KEEP slot.", keep=st.keep)
            return self._finish("keep", "Tile stored in KEEP slot.")

    def trash_active(self) -> Outcome:
        with self._exclusive("trash"):
            self._require_active()
            st = self.state
            if st.trash <= 0:
                raise NoTrashRemaining()
            self._head()
            self.history.push(self.snapshot())
            discarded = st.queue.pop(0)
            st.trash -= 1
            self._refill()
            self._emit("trash", "Tile discarded.", value=discarded, trash=st.trash)
            return self._finish("trash", "Tile discarded.")

    def undo(self) -> Outcome:
        """Restore the state from before the last place/keep/trash, reviving a finished game."""
        with self._exclusive("undo"):
            previous = self.history.pop()
            previous.game_over = False
            self.state = previous
            self.clock.elapsed_seconds = previous.elapsed_seconds
            self.clock.resume()
            self._refill()
            self._emit("undo", "Undo successful.", depth=len(self.history))
            return self._finish("undo", "Undo successful.")

    # ---------- session controls ----------

    def new_game(self) -> Outcome:
        with self._exclusive("new_game"):
            self.state = self._fresh_state()
            self.history.clear()
            self.clock.reset()
            self.hints_on = False
            self._emit("new_game", "Drag the top tile into the grid to start!")
            return self._finish("new_game", "Drag the top tile into the grid to start!")

    def set_difficulty(self, difficulty: Union[str, Difficulty]) -> Outcome:
        with self._exclusive("difficulty"):
            chosen = self.tiles.set_difficulty(difficulty)
            message = f"Difficulty set to {chosen.value.upper()}"
            self._emit("difficulty", message, difficulty=chosen.value)
            return self._finish("difficulty", message)

    def toggle_hints(self) -> Outcome:
        with self._exclusive("hints"):
            self.hints_on = not self.hints_on
            message = "Hints ON" if self.hints_on else "Hints OFF"
            self._emit("hints", message, on=self.hints_on)
            return self._finish("hints", message)

    def tick(self) -> int:
        elapsed = self.clock.tick()
        self.state.elapsed_seconds = elapsed
        return elapsed

    def pause(self) -> None:
        self.clock.pause()

    def resume(self) -> None:
        if not self.state.game_over:
            self.clock.resume()

    # ---------- read side ----------

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def difficulty(self) -> Difficulty:
        return self.tiles.difficulty

    def snapshot(self) -> SessionState:
        return self.state.clone()

    def hint_cells(self) -> List[Coord]:
        st = self.state
        if not self.hints_on or st.game_over or not st.queue:
            return []
        return hint_cells(st.board, st.queue[0])

    def view(self) -> SessionView:
        st = self.state
        return SessionView(
            grid=st.board.rows(),
            keep=st.keep,
            active=st.active,
            preview=st.preview(self.config.preview_size),
            queue_length=len(st.queue),
            score=st.score,
            best_score=self.best_score,
            level=st.level,
            trash=st.trash,
            game_over=st.game_over,
            elapsed_seconds=self.clock.elapsed_seconds,
            difficulty=self.tiles.difficulty.value,
            hints_on=self.hints_on,
            hints=self.hint_cells(),
            undo_depth=len(self.history),
        )
