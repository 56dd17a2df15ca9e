from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board, Coord, Tile

logger = logging.getLogger(__name__)

EQUAL = "equal"
DIVIDE = "divide"


@dataclass(frozen=True)
class MergeStep:
    """One rule application inside a cascade."""
    kind: str  # EQUAL or DIVIDE
    focus: Coord
    neighbor: Coord
    focus_value: Tile
    neighbor_value: Tile
    result: Optional[Tile]  # surviving quotient, None when both cells cleared
    result_at: Optional[Coord]
    points: int

    @property
    def message(self) -> str:
        if self.kind == EQUAL:
            return f"Equal tiles! {self.focus_value} & {self.neighbor_value} vanish (+{self.points})"
        if self.result is None:
            return f"Division result is 1, tile removed (+{self.points})"
        larger = max(self.focus_value, self.neighbor_value)
        smaller = min(self.focus_value, self.neighbor_value)
        return f"{larger} ÷ {smaller} = {self.result} (+{self.points})"


@dataclass
class MergeResult:
    origin: Coord
    focus: Coord
    steps: List[MergeStep] = field(default_factory=list)

    @property
    def points(self) -> int:
        return sum(s.points for s in self.steps)

    @property
    def merged(self) -> bool:
        return bool(self.steps)


def _apply_pair(board: Board, focus: Coord, neighbor: Coord) -> Optional[MergeStep]:
    a = board.at(*focus)
    b = board.at(*neighbor)
    if a is None or b is None:
        return None

    if a == b:
        board.clear(*focus)
        board.clear(*neighbor)
        return MergeStep(EQUAL, focus, neighbor, a, b, None, None, a + b)

    # Ties cannot reach here, so the focus is the larger cell exactly when a > b.
    larger_pos, smaller_pos = (focus, neighbor) if a > b else (neighbor, focus)
    larger, smaller = max(a, b), min(a, b)
    if larger % smaller != 0:
        return None

    quotient = larger // smaller
    board.clear(*smaller_pos)
    if quotient == 1:
        board.clear(*larger_pos)
        return MergeStep(DIVIDE, focus, neighbor, a, b, None, larger_pos, quotient * 2)
    board.set(larger_pos[0], larger_pos[1], quotient)
    return MergeStep(DIVIDE, focus, neighbor, a, b, quotient, larger_pos, quotient * 2)


def resolve(board: Board, r: int, c: int) -> MergeResult:
    """
    Run the merge cascade that starts at a freshly placed tile.

    Each pass scans the focus cell's neighbors (up, down, left, right) and fires
    the first equal or divisible pair. A divide moves the focus onto the cell
    that kept the quotient; an equal merge leaves the focus on its now-empty
    cell, so the following pass finds nothing. Stops after a pass with no action.
    """
    result = MergeResult(origin=(r, c), focus=(r, c))
    focus: Coord = (r, c)
    while True:
        step: Optional[MergeStep] = None
        for nb in board.neighbors_of(*focus):
            step = _apply_pair(board, focus, nb)
            if step is not None:
                break
        if step is None:
            break
        logger.debug("merge %s at %s/%s: %s", step.kind, step.focus, step.neighbor, step.message)
        result.steps.append(step)
        if step.kind == DIVIDE and step.result_at is not None:
            focus = step.result_at
    result.focus = focus
    return result
