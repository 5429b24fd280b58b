from __future__ import annotations

from blockfall.game import BlockfallGame, GameConfig, TetrominoType


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def i_piece_game(clock: FakeClock | None = None, **overrides) -> BlockfallGame:
    """Engine that only ever deals I pieces, so layouts are predictable."""
    config = GameConfig(shapes=(TetrominoType.I,), random_seed=7, **overrides)
    return BlockfallGame(config, clock=clock or FakeClock())
