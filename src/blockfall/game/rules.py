from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClearOutcome:
    lines: int
    points: int
    combo: int
    perfect_clear: bool
    message: Optional[str]


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    combo_step_bonus: int = 50
    perfect_clear_bonus: int = 1200

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1]
        # Unreachable with single-piece locks on a standard board
        return 100 * lines

    @staticmethod
    def next_combo(previous_combo: int, since_last_clear_ms: Optional[float], window_ms: float) -> int:
        if since_last_clear_ms is not None and since_last_clear_ms < window_ms:
            return previous_combo + 1
        return 1

    def combo_bonus(self, combo: int) -> int:
        return combo * self.combo_step_bonus if combo > 1 else 0

    def evaluate(
        self,
        lines: int,
        previous_combo: int,
        since_last_clear_ms: Optional[float],
        window_ms: float,
        perfect_clear: bool,
    ) -> ClearOutcome:
        """Score one committed clear of ``lines`` rows."""
        combo = self.next_combo(previous_combo, since_last_clear_ms, window_ms)
        total = (
            self.score_for_lines(lines)
            + self.combo_bonus(combo)
            + (self.perfect_clear_bonus if perfect_clear else 0)
        )
        return ClearOutcome(
            lines=lines,
            points=int(math.floor(total)),
            combo=combo,
            perfect_clear=perfect_clear,
            message=feedback_text(lines, combo, perfect_clear),
        )


def feedback_text(lines: int, combo: int, perfect_clear: bool) -> Optional[str]:
    if perfect_clear:
        return "PERFECT CLEAR!"
    if lines == 4:
        return "TETRIS!"
    if combo > 1:
        return f"{combo}x COMBO!"
    if lines > 1:
        return f"{lines} LINES!"
    return None
