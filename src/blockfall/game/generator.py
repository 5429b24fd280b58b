from __future__ import annotations

import random
from typing import Iterable, Optional

from .pieces import TetrominoType


class PieceGenerator:
    """Uniform random piece source with no bag or history."""

    def __init__(self, shapes: Iterable[TetrominoType], seed: Optional[int] = None) -> None:
        self.shapes = list(shapes)
        self.rng = random.Random(seed)

    def next(self) -> TetrominoType:
        return self.rng.choice(self.shapes)
