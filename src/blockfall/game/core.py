from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, List, Optional, Tuple, Union

from .config import GameConfig
from .generator import PieceGenerator
from .grid import GameGrid
from .pieces import Piece, TetrominoType
from .rules import ScoringRules
from .snapshot import FeedbackMessage, PieceState, Snapshot, ghost_position, overlay_cells


logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Action(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP_START = 2
    SOFT_DROP_STOP = 3
    ROTATE = 4
    HARD_DROP = 5
    TICK = 6
    COMMIT_CLEAR = 7
    RESTART = 8


class MoveResult(IntEnum):
    MOVED = 0
    REJECTED = 1
    LOCKED = 2


@dataclass(frozen=True)
class ScheduleClearCommit:
    """Host should apply ``Action.COMMIT_CLEAR`` once after ``delay_ms``."""

    delay_ms: int


@dataclass(frozen=True)
class TickIntervalChanged:
    interval_ms: int


@dataclass(frozen=True)
class GameOverReached:
    score: int


Effect = Union[ScheduleClearCommit, TickIntervalChanged, GameOverReached]


@dataclass(frozen=True)
class StepResult:
    snapshot: Snapshot
    effects: Tuple[Effect, ...]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class BlockfallGame:
    """Falling-block engine.

    The engine owns every piece of game state and advances only when the host
    applies an ``Action``. Timers live in the host: it calls ``apply(TICK)``
    every ``tick_interval()`` ms and ``apply(COMMIT_CLEAR)`` when a
    ``ScheduleClearCommit`` effect comes due. Each ``apply`` returns a fresh
    snapshot and the effects produced by that action.

    While rows are flashing (``PieceState.LOCKING``) there is no active piece
    and movement, rotation, drops and ticks are ignored until the commit.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.clock: Clock = clock or _monotonic_ms
        self.generator = PieceGenerator(self.config.shapes, self.config.random_seed)
        self.grid = GameGrid(self.config.cols, self.config.rows)
        self.score = 0
        self.level = 1
        self.lines_cleared_total = 0
        self.combo = 0
        self.last_clear_ms: Optional[float] = None
        self.soft_drop = False
        self.state = PieceState.SPAWNING
        self.current_piece: Optional[Piece] = None
        self.current_row = 0
        self.current_col = 0
        self.next_piece: Optional[TetrominoType] = None
        self.rows_to_clear: Tuple[int, ...] = ()
        self._pending_grid: Optional[GameGrid] = None
        self._message: Optional[FeedbackMessage] = None
        self._message_expires_ms = 0.0
        self._message_ids = itertools.count(1)
        self._effects: List[Effect] = []
        self.reset()

    def reset(self) -> None:
        self.grid.reset()
        self.score = 0
        self.level = 1
        self.lines_cleared_total = 0
        self.combo = 0
        self.last_clear_ms = None
        self.soft_drop = False
        self.rows_to_clear = ()
        self._pending_grid = None
        self._message = None
        self._message_expires_ms = 0.0
        self.current_piece = None
        self.next_piece = self.generator.next()
        self._spawn_piece()

    @property
    def game_over(self) -> bool:
        return self.state == PieceState.GAME_OVER

    def _spawn_piece(self) -> None:
        self.state = PieceState.SPAWNING
        assert self.next_piece is not None
        piece = Piece(self.next_piece)
        self.next_piece = self.generator.next()
        row = 0
        col = self.config.cols // 2 - piece.width // 2
        if self.grid.collides(piece, row, col):
            self.current_piece = None
            self.state = PieceState.GAME_OVER
            logger.info("Game over: %s cannot spawn, final score %d", piece.kind.name, self.score)
            self._effects.append(GameOverReached(self.score))
            return
        self.current_piece = piece
        self.current_row = row
        self.current_col = col
        self.state = PieceState.FALLING
        logger.debug("Spawned %s at (%d, %d), next %s", piece.kind.name, row, col, self.next_piece.name)

    def apply(self, action: Action) -> StepResult:
        self._effects = []
        interval_before = self.tick_interval()

        if action == Action.RESTART:
            self.reset()
        elif self.game_over:
            pass
        elif action == Action.MOVE_LEFT:
            self.move(0, -1)
        elif action == Action.MOVE_RIGHT:
            self.move(0, 1)
        elif action == Action.TICK:
            self.move(1, 0)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.SOFT_DROP_START:
            self.soft_drop = True
        elif action == Action.SOFT_DROP_STOP:
            self.soft_drop = False
        elif action == Action.COMMIT_CLEAR:
            self.commit_clear()

        interval_after = self.tick_interval()
        if interval_after != interval_before:
            self._effects.append(TickIntervalChanged(interval_after))

        effects = tuple(self._effects)
        self._effects = []
        return StepResult(self.snapshot(), effects)

    def tick_interval(self) -> int:
        cfg = self.config
        if self.soft_drop:
            return cfg.soft_drop_tick_ms
        return max(cfg.min_tick_ms, cfg.base_tick_ms - (self.level - 1) * cfg.level_speedup_ms)

    def move(self, d_row: int, d_col: int) -> MoveResult:
        """Shift the active piece; a blocked one-row fall locks it."""
        if self.state != PieceState.FALLING or self.current_piece is None:
            return MoveResult.REJECTED
        new_row = self.current_row + d_row
        new_col = self.current_col + d_col
        if not self.grid.collides(self.current_piece, new_row, new_col):
            self.current_row = new_row
            self.current_col = new_col
            return MoveResult.MOVED
        if d_row == 1 and d_col == 0:
            self._lock_piece()
            return MoveResult.LOCKED
        return MoveResult.REJECTED

    def rotate(self) -> bool:
        if self.state != PieceState.FALLING or self.current_piece is None:
            return False
        rotated = self.current_piece.rotated(1)
        for kick in (0,) + self.config.kick_offsets:
            col = self.current_col + kick
            if not self.grid.collides(rotated, self.current_row, col):
                self.current_piece = rotated
                self.current_col = col
                return True
        return False

    def ghost_position(self) -> Optional[Tuple[int, int]]:
        if self.current_piece is None:
            return None
        return ghost_position(self.grid, self.current_piece, self.current_row, self.current_col)

    def hard_drop(self) -> bool:
        if self.state != PieceState.FALLING or self.current_piece is None:
            return False
        self.current_row, self.current_col = ghost_position(
            self.grid, self.current_piece, self.current_row, self.current_col
        )
        self._lock_piece()
        return True

    def _lock_piece(self) -> None:
        assert self.current_piece is not None
        self.state = PieceState.LOCKING
        merged = self.grid.merge(self.current_piece, self.current_row, self.current_col)
        logger.debug(
            "Locked %s at (%d, %d)", self.current_piece.kind.name, self.current_row, self.current_col
        )
        self.current_piece = None
        full_rows = merged.find_full_rows()
        if not full_rows:
            self.combo = 0
            self.grid = merged
            self._spawn_piece()
            return
        self.rows_to_clear = tuple(full_rows)
        self._pending_grid = merged
        self._effects.append(ScheduleClearCommit(self.config.clear_delay_ms))

    def commit_clear(self) -> bool:
        """Remove the flagged rows, score them, and spawn the next piece."""
        if self.state != PieceState.LOCKING or self._pending_grid is None:
            return False
        rows = self.rows_to_clear
        new_grid = self._pending_grid.clear_rows(rows)
        now = self.clock()
        since_last = None if self.last_clear_ms is None else now - self.last_clear_ms
        outcome = self.rules.evaluate(
            lines=len(rows),
            previous_combo=self.combo,
            since_last_clear_ms=since_last,
            window_ms=self.config.combo_window_ms,
            perfect_clear=new_grid.is_empty(),
        )
        self.grid = new_grid
        self._pending_grid = None
        self.score += outcome.points
        self.combo = outcome.combo
        self.last_clear_ms = now
        self.lines_cleared_total += outcome.lines
        logger.debug(
            "Cleared rows %s for %d points (combo %d)", list(rows), outcome.points, outcome.combo
        )
        # At most one level per commit
        if self.lines_cleared_total >= self.level * self.config.lines_per_level:
            self.level += 1
            logger.info("Level up: %d after %d lines", self.level, self.lines_cleared_total)
        self.rows_to_clear = ()
        if outcome.message is not None:
            self._message = FeedbackMessage(next(self._message_ids), outcome.message)
            self._message_expires_ms = now + self.config.message_ttl_ms
        self._spawn_piece()
        return True

    def current_message(self) -> Optional[FeedbackMessage]:
        if self._message is not None and self.clock() >= self._message_expires_ms:
            self._message = None
        return self._message

    def snapshot(self) -> Snapshot:
        board = self._pending_grid if self._pending_grid is not None else self.grid
        cells = overlay_cells(
            board,
            self.current_piece,
            self.current_row,
            self.current_col,
            show_ghost=self.config.show_ghost,
        )
        return Snapshot(
            cells=cells,
            score=self.score,
            level=self.level,
            lines_cleared=self.lines_cleared_total,
            combo=self.combo,
            rows_to_clear=self.rows_to_clear,
            message=self.current_message(),
            next_piece=self.next_piece,
            state=self.state,
            show_ghost=self.config.show_ghost,
        )
