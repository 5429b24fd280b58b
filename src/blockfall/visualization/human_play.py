from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from blockfall.game import (
    Action,
    BlockfallGame,
    GameConfig,
    GameOverReached,
    ScheduleClearCommit,
    StepResult,
    TickIntervalChanged,
)
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP_START,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_r: Action.RESTART,
}

KEYUP_TO_ACTION: Dict[int, Action] = {
    pygame.K_DOWN: Action.SOFT_DROP_STOP,
}


class GameLoop:
    """Single long-lived host for one engine.

    Holds the tick and clear-commit deadlines and feeds the engine actions;
    the engine never sees pygame.
    """

    def __init__(self, game: BlockfallGame) -> None:
        self.game = game
        self.tick_ms = game.tick_interval()
        self.next_tick_at = 0
        self.commit_at: Optional[int] = None

    def start(self, now: int) -> None:
        self.next_tick_at = now + self.tick_ms

    def dispatch(self, action: Action, now: int) -> StepResult:
        result = self.game.apply(action)
        for effect in result.effects:
            if isinstance(effect, ScheduleClearCommit):
                self.commit_at = now + effect.delay_ms
            elif isinstance(effect, TickIntervalChanged):
                self.tick_ms = effect.interval_ms
                self.next_tick_at = min(self.next_tick_at, now + self.tick_ms)
            elif isinstance(effect, GameOverReached):
                logger.info("Game over with score %d", effect.score)
        if action == Action.RESTART:
            self.commit_at = None
            self.next_tick_at = now + self.tick_ms
        return result

    def advance(self, now: int) -> None:
        if self.commit_at is not None and now >= self.commit_at:
            self.commit_at = None
            self.dispatch(Action.COMMIT_CLEAR, now)
        if now >= self.next_tick_at:
            self.next_tick_at = now + self.tick_ms
            self.dispatch(Action.TICK, now)


def run(config: Optional[GameConfig] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = BlockfallGame(config, clock=pygame.time.get_ticks)
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(game.config.rows, game.config.cols))
        pygame.display.set_caption("Blockfall")

        loop = GameLoop(game)
        loop.start(pygame.time.get_ticks())

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            loop.dispatch(action, pygame.time.get_ticks())
                elif event.type == pygame.KEYUP:
                    action = KEYUP_TO_ACTION.get(event.key)
                    if action is not None:
                        loop.dispatch(action, pygame.time.get_ticks())

            loop.advance(pygame.time.get_ticks())
            renderer.draw(screen, game.snapshot())
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
