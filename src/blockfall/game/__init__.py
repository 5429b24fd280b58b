"""Game module for Blockfall.

Exports the engine and supporting classes:
- GameGrid: committed cells, collision checks and row clearing
- Piece: tetromino with computed clockwise rotations
- TetrominoType: enum of the seven shapes
- PieceGenerator: uniform random piece source
- ScoringRules: line, combo and perfect-clear scoring
- GameConfig: validated session parameters
- BlockfallGame: state machine driven by Action values
- Snapshot: render-facing view of the engine
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, Piece, TetrominoType, rotate_clockwise
from .generator import PieceGenerator
from .rules import ClearOutcome, ScoringRules
from .config import GameConfig
from .snapshot import Cell, CellKind, FeedbackMessage, PieceState, Snapshot, ghost_position
from .core import (
    Action,
    BlockfallGame,
    GameOverReached,
    MoveResult,
    ScheduleClearCommit,
    StepResult,
    TickIntervalChanged,
)

__all__ = [
    "GameGrid",
    "BASE_SHAPES",
    "Piece",
    "TetrominoType",
    "rotate_clockwise",
    "PieceGenerator",
    "ClearOutcome",
    "ScoringRules",
    "GameConfig",
    "Cell",
    "CellKind",
    "FeedbackMessage",
    "PieceState",
    "Snapshot",
    "ghost_position",
    "Action",
    "BlockfallGame",
    "GameOverReached",
    "MoveResult",
    "ScheduleClearCommit",
    "StepResult",
    "TickIntervalChanged",
]
