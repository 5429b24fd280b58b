from __future__ import annotations

from typing import Tuple

import pygame

from blockfall.game import CellKind, Piece, Snapshot, TetrominoType


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        int(TetrominoType.I): (0, 240, 240),
        int(TetrominoType.O): (240, 240, 0),
        int(TetrominoType.T): (160, 0, 240),
        int(TetrominoType.L): (240, 160, 0),
        int(TetrominoType.J): (0, 0, 240),
        int(TetrominoType.S): (0, 240, 0),
        int(TetrominoType.Z): (240, 0, 0),
    }
    return palette.get(abs(v), (200, 200, 200))


FLASH_COLOR = (245, 245, 245)
TEXT_COLOR = (230, 230, 230)


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font = None

    def window_size(self, rows: int, cols: int) -> Tuple[int, int]:
        width = cols * self.cell_size + self.panel_cells * self.cell_size + self.margin * 3
        height = rows * self.cell_size + self.margin * 2
        return width, height

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        return self._font

    def _grid_surface(self, snapshot: Snapshot) -> pygame.Surface:
        h, w = snapshot.rows, snapshot.cols
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        flashing = set(snapshot.rows_to_clear)
        for y, row in enumerate(snapshot.cells):
            for x, cell in enumerate(row):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                if y in flashing:
                    pygame.draw.rect(surf, FLASH_COLOR, rect)
                elif cell.kind == CellKind.GHOST:
                    pygame.draw.rect(surf, _color_for_value(0), rect)
                    pygame.draw.rect(surf, _color_for_value(int(cell.shape)), rect, 2)
                elif cell.kind == CellKind.FILLED:
                    pygame.draw.rect(surf, _color_for_value(int(cell.shape)), rect)
                else:
                    pygame.draw.rect(surf, _color_for_value(0), rect)
        return surf

    def _draw_panel(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        font = self._font_obj()
        x0 = self.margin * 2 + snapshot.cols * self.cell_size
        y0 = self.margin
        lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines_cleared}",
            "Next:",
        ]
        for i, txt in enumerate(lines):
            screen.blit(font.render(txt, True, TEXT_COLOR), (x0, y0 + i * 24))
        if snapshot.next_piece is not None:
            preview = Piece(snapshot.next_piece).shape()
            py0 = y0 + len(lines) * 24 + 6
            cell = self.cell_size // 2 + 4
            for py in range(preview.shape[0]):
                for px in range(preview.shape[1]):
                    if preview[py, px]:
                        rect = pygame.Rect(x0 + px * cell, py0 + py * cell, cell - 1, cell - 1)
                        pygame.draw.rect(screen, _color_for_value(int(snapshot.next_piece)), rect)
        if snapshot.message is not None:
            img = font.render(snapshot.message.text, True, (255, 215, 90))
            screen.blit(img, (x0, y0 + 10 * 24))

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        grid_surf = self._grid_surface(snapshot)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_panel(screen, snapshot)
        if snapshot.game_over:
            font = self._font_obj()
            text = font.render("Game Over - Press R to restart, ESC to quit", True, (255, 100, 100))
            rect = text.get_rect(center=(screen.get_width() // 2, self.margin // 2 + 2))
            screen.blit(text, rect)
        pygame.display.flip()
