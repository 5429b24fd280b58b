from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from blockfall.errors import ConfigurationError

from .pieces import BASE_SHAPES, TetrominoType


@dataclass
class GameConfig:
    """Tunable parameters of a game session.

    Times are in milliseconds. Values are checked once at construction and a
    ``ConfigurationError`` is raised for anything the engine cannot run with.
    """

    rows: int = 20
    cols: int = 10
    base_tick_ms: int = 500
    soft_drop_tick_ms: int = 50
    min_tick_ms: int = 100
    level_speedup_ms: int = 50
    clear_delay_ms: int = 300
    combo_window_ms: int = 3000
    message_ttl_ms: int = 1500
    lines_per_level: int = 10
    kick_offsets: Tuple[int, ...] = (-1, 1, -2, 2)
    show_ghost: bool = True
    shapes: Tuple[TetrominoType, ...] = field(default_factory=lambda: tuple(TetrominoType))
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(
                f"board dimensions must be positive, got {self.rows}x{self.cols}"
            )
        for name in ("base_tick_ms", "soft_drop_tick_ms", "min_tick_ms", "lines_per_level"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("level_speedup_ms", "clear_delay_ms", "combo_window_ms", "message_ttl_ms"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative, got {getattr(self, name)}")
        self.kick_offsets = tuple(int(k) for k in self.kick_offsets)
        try:
            self.shapes = tuple(TetrominoType(s) for s in self.shapes)
        except ValueError as exc:
            raise ConfigurationError(f"unknown shape in {self.shapes!r}") from exc
        if not self.shapes:
            raise ConfigurationError("shape set must not be empty")
        widest = max(BASE_SHAPES[s].shape[1] for s in self.shapes)
        if widest > self.cols or widest > self.rows:
            raise ConfigurationError(
                f"board {self.rows}x{self.cols} cannot hold a {widest}-wide piece matrix"
            )
