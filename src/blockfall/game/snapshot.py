"""Render-facing view of the engine state.

Renderers only ever see a ``Snapshot``: the committed board with the active
piece and its ghost overlaid, plus the scalar counters and feedback message.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import Piece, TetrominoType


class CellKind(IntEnum):
    EMPTY = 0
    FILLED = 1
    GHOST = 2


@dataclass(frozen=True)
class Cell:
    kind: CellKind = CellKind.EMPTY
    shape: Optional[TetrominoType] = None


EMPTY_CELL = Cell()


class PieceState(IntEnum):
    FALLING = 0
    LOCKING = 1
    SPAWNING = 2
    GAME_OVER = 3


@dataclass(frozen=True)
class FeedbackMessage:
    id: int
    text: str


@dataclass(frozen=True)
class Snapshot:
    cells: Tuple[Tuple[Cell, ...], ...]
    score: int
    level: int
    lines_cleared: int
    combo: int
    rows_to_clear: Tuple[int, ...]
    message: Optional[FeedbackMessage]
    next_piece: Optional[TetrominoType]
    state: PieceState
    show_ghost: bool = True

    @property
    def game_over(self) -> bool:
        return self.state == PieceState.GAME_OVER

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def to_array(self) -> np.ndarray:
        """Integer view: shape id for filled cells, negated shape id for ghost cells, 0 otherwise."""
        out = np.zeros((self.rows, self.cols), dtype=np.int8)
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell.kind == CellKind.FILLED:
                    out[r, c] = int(cell.shape)
                elif cell.kind == CellKind.GHOST:
                    out[r, c] = -int(cell.shape)
        return out


def ghost_position(grid: GameGrid, piece: Piece, row: int, col: int) -> Tuple[int, int]:
    """Lowest position the piece reaches by moving straight down from (row, col)."""
    landing = row
    # Capped at the board height so a degenerate grid cannot loop forever
    for _ in range(grid.height):
        if grid.collides(piece, landing + 1, col):
            break
        landing += 1
    return landing, col


def overlay_cells(
    grid: GameGrid,
    piece: Optional[Piece],
    row: int,
    col: int,
    show_ghost: bool = True,
) -> Tuple[Tuple[Cell, ...], ...]:
    cells = [
        [Cell(CellKind.FILLED, TetrominoType(int(v))) if v else EMPTY_CELL for v in line]
        for line in grid.grid
    ]
    if piece is not None:
        if show_ghost:
            ghost_row, ghost_col = ghost_position(grid, piece, row, col)
            ghost = Cell(CellKind.GHOST, piece.kind)
            for r, c in piece.cells_at(ghost_row, ghost_col):
                if grid.is_inside(r, c) and cells[r][c].kind == CellKind.EMPTY:
                    cells[r][c] = ghost
        active = Cell(CellKind.FILLED, piece.kind)
        for r, c in piece.cells_at(row, col):
            if grid.is_inside(r, c):
                cells[r][c] = active
    return tuple(tuple(line) for line in cells)
