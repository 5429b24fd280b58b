from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    L = 4
    J = 5
    S = 6
    Z = 7


Shape = np.ndarray


def rotate_clockwise(shape: Shape) -> Shape:
    """Rotate a square matrix 90 degrees clockwise (transpose, then reverse each row)."""
    return np.rot90(shape, 1, axes=(1, 0))


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    for _ in range(k):
        shape = rotate_clockwise(shape)
    return shape


# Square bounding boxes so that rotation pivots around the box centre.
BASE_SHAPES = {
    TetrominoType.I: np.array(
        [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8
    ),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
}


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    rotation: int = 0  # quarter turns clockwise, 0..3

    def shape(self) -> Shape:
        return _rot90(BASE_SHAPES[self.kind], self.rotation)

    def rotated(self, delta: int = 1) -> "Piece":
        return Piece(self.kind, (self.rotation + delta) % 4)

    @property
    def width(self) -> int:
        return int(self.shape().shape[1])

    def cells_at(self, origin_row: int, origin_col: int) -> List[Tuple[int, int]]:
        """Absolute (row, col) coordinates of the filled cells with the matrix origin at the given position."""
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dr in range(h):
            for dc in range(w):
                if s[dr, dc]:
                    cells.append((origin_row + dr, origin_col + dc))
        return cells
