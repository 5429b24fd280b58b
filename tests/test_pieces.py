import unittest

import numpy as np

from blockfall.game import BASE_SHAPES, Piece, TetrominoType, rotate_clockwise


class PieceRotationTests(unittest.TestCase):
    def test_four_rotations_restore_every_shape(self):
        for kind, base in BASE_SHAPES.items():
            shape = base
            for _ in range(4):
                shape = rotate_clockwise(shape)
            self.assertTrue(np.array_equal(shape, base), kind.name)
            self.assertTrue(np.array_equal(Piece(kind).rotated(4).shape(), base))

    def test_rotate_clockwise_turns_t_to_point_right(self):
        rotated = rotate_clockwise(BASE_SHAPES[TetrominoType.T])
        expected = np.array([[0, 1, 0], [0, 1, 1], [0, 1, 0]])
        self.assertTrue(np.array_equal(rotated, expected))

    def test_rotation_matches_transpose_then_row_reverse(self):
        for base in BASE_SHAPES.values():
            expected = base.T[:, ::-1]
            self.assertTrue(np.array_equal(rotate_clockwise(base), expected))

    def test_shapes_are_square_with_four_cells(self):
        for kind, base in BASE_SHAPES.items():
            h, w = base.shape
            self.assertEqual(h, w, kind.name)
            self.assertEqual(int(base.sum()), 4, kind.name)

    def test_rotated_returns_new_piece(self):
        piece = Piece(TetrominoType.L)
        turned = piece.rotated()
        self.assertEqual(piece.rotation, 0)
        self.assertEqual(turned.rotation, 1)
        self.assertEqual(turned.kind, TetrominoType.L)
        self.assertEqual(Piece(TetrominoType.L, 3).rotated().rotation, 0)


class PieceCellTests(unittest.TestCase):
    def test_horizontal_i_cells(self):
        cells = Piece(TetrominoType.I).cells_at(0, 3)
        self.assertEqual(cells, [(1, 3), (1, 4), (1, 5), (1, 6)])

    def test_vertical_i_cells(self):
        cells = Piece(TetrominoType.I, 1).cells_at(0, 3)
        self.assertEqual(cells, [(0, 5), (1, 5), (2, 5), (3, 5)])

    def test_width_is_matrix_width(self):
        self.assertEqual(Piece(TetrominoType.I).width, 4)
        self.assertEqual(Piece(TetrominoType.O).width, 2)
        self.assertEqual(Piece(TetrominoType.S).width, 3)


if __name__ == "__main__":
    unittest.main()
