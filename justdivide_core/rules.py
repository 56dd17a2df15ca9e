from __future__ import annotations

from typing import List, Optional

from .board import Board, Coord, Tile


def can_merge(a: Optional[Tile], b: Optional[Tile]) -> bool:
    """True when two tiles would react: equal, or one evenly divides the other."""
    if a is None or b is None:
        return False
    if a == b:
        return True
    return max(a, b) % min(a, b) == 0


def is_terminal(board: Board) -> bool:
    """
    Decide whether the board is dead: full, with no adjacent pair that can merge.

    Returns False as soon as an empty cell or a mergeable pair is found.
    """
    if not board.is_full():
        return False
    for r, c in board.coords():
        v = board.at(r, c)
        for nr, nc in board.neighbors_of(r, c):
            if can_merge(v, board.at(nr, nc)):
                return False
    return True


def legal_cells(board: Board) -> List[Coord]:
    """Every cell where a placement would pass Board.check_placement."""
    if board.is_empty():
        return list(board.coords())
    return [
        (r, c) for r, c in board.coords()
        if board.at(r, c) is None and board.has_occupied_neighbor(r, c)
    ]


def hint_cells(board: Board, value: Tile) -> List[Coord]:
    """Legal cells where `value` would merge with at least one neighbor.

    On an empty board every cell is offered, since any first tile is fine.
    """
    if board.is_empty():
        return list(board.coords())
    out: List[Coord] = []
    for r, c in legal_cells(board):
        if any(can_merge(value, board.at(nr, nc)) for nr, nc in board.neighbors_of(r, c)):
            out.append((r, c))
    return out
