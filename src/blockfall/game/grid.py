from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

import numpy as np

from .pieces import Piece


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class GameGrid:
    """Committed cells of the playfield.

    The grid uses 0 for empty cells and the ``TetrominoType`` value of the
    piece that filled a cell otherwise. Row 0 is the top. ``merge`` and
    ``clear_rows`` return new grids and leave the receiver untouched, so the
    engine can hold on to a pre-clear board while rows are flashing.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    @classmethod
    def from_array(cls, cells: np.ndarray) -> "GameGrid":
        h, w = cells.shape
        new_grid = cls(w, h)
        new_grid.grid = np.asarray(cells, dtype=np.int8).copy()
        return new_grid

    def reset(self) -> None:
        self.grid.fill(0)

    def copy(self) -> "GameGrid":
        return GameGrid.from_array(self.grid)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_occupied(self, row: int, col: int) -> bool:
        return bool(self.grid[row, col] != 0)

    def is_empty(self) -> bool:
        return not bool(np.any(self.grid))

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for row, col in cells:
            if not self.is_inside(row, col):
                return False
            if self.grid[row, col] != 0:
                return False
        return True

    def collides(self, piece: Piece, row: int, col: int) -> bool:
        """True if any filled cell of ``piece`` at (row, col) is out of bounds or overlaps a committed cell."""
        return not self.can_place(piece.cells_at(row, col))

    def merge(self, piece: Piece, row: int, col: int) -> "GameGrid":
        """Return a new grid with the piece written in.

        Cells that fall outside the board are dropped.
        """
        merged = self.copy()
        value = int(piece.kind)
        for r, c in piece.cells_at(row, col):
            if merged.is_inside(r, c):
                merged.grid[r, c] = value
            else:
                logger.warning("Dropping %s cell outside the board at (%d, %d)", piece.kind.name, r, c)
        return merged

    def find_full_rows(self) -> List[int]:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        return [int(r) for r in full_rows]

    def clear_rows(self, rows: Iterable[int]) -> "GameGrid":
        """Return a new grid without ``rows``, padded with empty rows on top."""
        to_clear = sorted(set(int(r) for r in rows))
        for r in to_clear:
            if not 0 <= r < self.height:
                raise IndexError(f"row {r} outside board of height {self.height}")
        if not to_clear:
            return self.copy()
        mask = np.ones(self.height, dtype=bool)
        mask[to_clear] = False
        remaining = self.grid[mask]
        new_rows = np.zeros((len(to_clear), self.width), dtype=np.int8)
        return GameGrid.from_array(np.vstack((new_rows, remaining)))
