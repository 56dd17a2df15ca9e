from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .errors import IsolatedPlacement, OccupiedCell, OutOfBounds

Tile = int
Cell = Optional[Tile]  # None == empty
Coord = Tuple[int, int]

# Neighbor scan order: up, down, left, right. Merge replay depends on it.
DIRECTIONS: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class Board:
    """The square tile grid. Cells are stored row-major; None marks an empty cell."""
    size: int = 4
    cells: List[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"Board size must be positive, got {self.size}")
        if not self.cells:
            self.cells = [None] * (self.size * self.size)
        elif len(self.cells) != self.size * self.size:
            raise ValueError(f"Expected {self.size * self.size} cells, got {len(self.cells)}")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Board":
        size = len(rows)
        flat: List[Cell] = []
        for row in rows:
            if len(row) != size:
                raise ValueError("Board rows must form a square")
            flat.extend(row)
        return cls(size=size, cells=flat)

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * self.size + c

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.size and 0 <= c < self.size

    def _require(self, r: int, c: int) -> None:
        if not self.in_bounds(r, c):
            raise OutOfBounds(context={"row": r, "col": c})

    def at(self, r: int, c: int) -> Cell:
        self._require(r, c)
        return self.cells[self.index(r, c)]

    def set(self, r: int, c: int, value: Cell) -> None:
        self._require(r, c)
        self.cells[self.index(r, c)] = value

    def clear(self, r: int, c: int) -> None:
        self.set(r, c, None)

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board, row by row."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def occupied(self) -> List[Coord]:
        return [rc for rc in self.coords() if self.cells[self.index(*rc)] is not None]

    def is_empty(self) -> bool:
        return all(v is None for v in self.cells)

    def is_full(self) -> bool:
        return all(v is not None for v in self.cells)

    def neighbors_of(self, r: int, c: int) -> List[Coord]:
        """Orthogonal in-bounds neighbors, in up/down/left/right order."""
        out: List[Coord] = []
        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if self.in_bounds(nr, nc):
                out.append((nr, nc))
        return out

    def has_occupied_neighbor(self, r: int, c: int) -> bool:
        return any(self.at(nr, nc) is not None for nr, nc in self.neighbors_of(r, c))

    def check_placement(self, r: int, c: int) -> None:
        """Raise the matching PlacementError if a tile may not go at (r, c). Never mutates."""
        self._require(r, c)
        if self.at(r, c) is not None:
            raise OccupiedCell(context={"row": r, "col": c})
        if not self.is_empty() and not self.has_occupied_neighbor(r, c):
            raise IsolatedPlacement(context={"row": r, "col": c})

    def place(self, r: int, c: int, value: Tile) -> None:
        if value is None or int(value) <= 0:
            raise ValueError(f"Tile values must be positive integers, got {value!r}")
        self.check_placement(r, c)
        self.set(r, c, int(value))

    def rows(self) -> List[List[Cell]]:
        return [self.cells[r * self.size:(r + 1) * self.size] for r in range(self.size)]

    def copy(self) -> "Board":
        return Board(size=self.size, cells=list(self.cells))

    def pretty(self, marks: Optional[Set[Coord]] = None) -> str:
        """Text grid for terminals. Empty cells show '.', marked empty cells show '*'."""
        mset = marks or set()
        width = max([len(str(v)) for v in self.cells if v is not None] + [1])
        lines: List[str] = []
        for r in range(self.size):
            row: List[str] = []
            for c in range(self.size):
                v = self.cells[self.index(r, c)]
                if v is not None:
                    row.append(str(v).rjust(width))
                elif (r, c) in mset:
                    row.append("*".rjust(width))
                else:
                    row.append(".".rjust(width))
            lines.append(" ".join(row))
        return "\n".join(lines)
