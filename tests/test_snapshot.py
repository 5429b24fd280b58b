import unittest

import numpy as np

from blockfall.game import Action, Cell, CellKind, GameGrid, Piece, TetrominoType, ghost_position
from tests.helpers import FakeClock, i_piece_game

I = TetrominoType.I


class GhostPositionTests(unittest.TestCase):
    def test_ghost_on_empty_board(self):
        grid = GameGrid(10, 20)
        self.assertEqual(ghost_position(grid, Piece(I), 0, 3), (18, 3))
        self.assertEqual(ghost_position(grid, Piece(TetrominoType.O), 0, 4), (18, 4))

    def test_ghost_rests_on_stack(self):
        grid = GameGrid(10, 20)
        grid.grid[15, 6] = 1
        self.assertEqual(ghost_position(grid, Piece(I), 0, 3), (13, 3))

    def test_ghost_query_does_not_mutate(self):
        game = i_piece_game()
        game.ghost_position()
        self.assertEqual((game.current_row, game.current_col), (0, 3))
        self.assertTrue(game.grid.is_empty())


class SnapshotCellTests(unittest.TestCase):
    def test_active_and_ghost_cells(self):
        snap = i_piece_game().snapshot()
        self.assertEqual(snap.rows, 20)
        self.assertEqual(snap.cols, 10)
        for c in range(10):
            expected_active = Cell(CellKind.FILLED, I) if 3 <= c < 7 else Cell()
            expected_ghost = Cell(CellKind.GHOST, I) if 3 <= c < 7 else Cell()
            self.assertEqual(snap.cells[1][c], expected_active)
            self.assertEqual(snap.cells[19][c], expected_ghost)

    def test_ghost_hidden_when_disabled(self):
        snap = i_piece_game(show_ghost=False).snapshot()
        kinds = {cell.kind for row in snap.cells for cell in row}
        self.assertNotIn(CellKind.GHOST, kinds)
        self.assertFalse(snap.show_ghost)

    def test_ghost_does_not_cover_active_piece(self):
        game = i_piece_game()
        for _ in range(18):
            game.apply(Action.TICK)
        snap = game.snapshot()
        self.assertEqual(snap.cells[19][3], Cell(CellKind.FILLED, I))

    def test_locked_cells_keep_shape_id(self):
        game = i_piece_game()
        game.apply(Action.HARD_DROP)
        snap = game.snapshot()
        self.assertEqual(snap.cells[19][4], Cell(CellKind.FILLED, I))

    def test_to_array_marks_ghost_negative(self):
        arr = i_piece_game().snapshot().to_array()
        self.assertEqual(arr[1, 3:7].tolist(), [int(I)] * 4)
        self.assertEqual(arr[19, 3:7].tolist(), [-int(I)] * 4)
        self.assertEqual(int(np.count_nonzero(arr)), 8)

    def test_counters_and_preview(self):
        snap = i_piece_game().snapshot()
        self.assertEqual((snap.score, snap.level, snap.lines_cleared, snap.combo), (0, 1, 0, 0))
        self.assertEqual(snap.next_piece, I)
        self.assertEqual(snap.rows_to_clear, ())
        self.assertIsNone(snap.message)
        self.assertFalse(snap.game_over)


class FeedbackMessageTests(unittest.TestCase):
    def _perfect_clear(self, game):
        game.grid.grid[19, :] = int(TetrominoType.S)
        game.grid.grid[19, 3:7] = 0
        game.apply(Action.HARD_DROP)
        return game.apply(Action.COMMIT_CLEAR)

    def test_pending_rows_show_pre_clear_board(self):
        game = i_piece_game()
        game.grid.grid[19, :] = int(TetrominoType.S)
        game.grid.grid[19, 3:7] = 0
        snap = game.apply(Action.HARD_DROP).snapshot
        self.assertEqual(snap.rows_to_clear, (19,))
        self.assertTrue(all(cell.kind == CellKind.FILLED for cell in snap.cells[19]))

    def test_message_expires_after_ttl(self):
        clock = FakeClock(1000)
        game = i_piece_game(clock)
        message = self._perfect_clear(game).snapshot.message
        self.assertEqual(message.text, "PERFECT CLEAR!")
        clock.now = 2499
        self.assertEqual(game.snapshot().message, message)
        clock.now = 2500
        self.assertIsNone(game.snapshot().message)

    def test_message_ids_are_unique(self):
        clock = FakeClock(1000)
        game = i_piece_game(clock)
        first = self._perfect_clear(game).snapshot.message
        clock.advance(10000)
        second = self._perfect_clear(game).snapshot.message
        self.assertEqual(first.text, second.text)
        self.assertNotEqual(first.id, second.id)


if __name__ == "__main__":
    unittest.main()
