"""Tests for the Grid data structure."""

import numpy as np
import pytest

from tictactoe.core.types import Grid, Player


class TestGridAddressing:
    """Row-major cell numbering."""

    def test_cell_number_round_trip(self):
        grid = Grid(4)
        assert grid.cell_number(2, 3) == 11
        assert grid.position_of(11) == (2, 3)
        assert grid.row_of(4) == 1
        assert grid.column_of(4) == 0

    def test_in_bounds(self):
        grid = Grid(3)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(2, 2)
        assert not grid.in_bounds(-1, 0)
        assert not grid.in_bounds(0, 3)

    def test_too_small(self):
        with pytest.raises(ValueError):
            Grid(2)


class TestGridMarking:
    """The single mutation: marking a cell."""

    def test_mark_empty_cell(self):
        grid = Grid(3)
        assert grid.mark(1, 1, "X") is True
        assert grid.marker_at(1, 1) == "X"
        assert 4 not in grid.available_cells()

    def test_occupied_cell_is_never_overwritten(self):
        grid = Grid(3)
        grid.mark(0, 0, "X")
        assert grid.mark(0, 0, "O") is False
        assert grid.marker_at(0, 0) == "X"

    def test_out_of_bounds_leaves_grid_unchanged(self):
        grid = Grid(3)
        before = grid.snapshot()
        assert grid.mark(3, 0, "X") is False
        assert grid.mark(0, -1, "X") is False
        assert grid == before

    def test_marker_must_be_single_char(self):
        grid = Grid(3)
        with pytest.raises(ValueError):
            grid.mark(0, 0, "XO")

    @pytest.mark.parametrize("marker", ["\x00", " ", "\t", "\n"])
    def test_unprintable_or_blank_marker_rejected(self, marker):
        grid = Grid(3)
        with pytest.raises(ValueError):
            grid.mark(0, 0, marker)
        assert grid.is_empty(0, 0)

    def test_unprintable_marker_rejected_for_player(self):
        with pytest.raises(ValueError):
            Player(number=1, marker="\x00")

    def test_full_and_clear(self):
        grid = Grid.from_rows(["XOX", "OXO", "OXO"])
        assert grid.is_full()
        assert grid.available_cells() == []
        grid.clear()
        assert grid.available_cells() == list(range(9))


class TestGridSnapshot:
    """Read-only access for evaluators and bots."""

    def test_snapshot_is_read_only(self):
        grid = Grid.from_rows(["X..", "...", "..."])
        frozen = grid.snapshot()
        with pytest.raises(ValueError):
            frozen.mark(1, 1, "O")

    def test_snapshot_does_not_follow_later_marks(self):
        grid = Grid(3)
        frozen = grid.snapshot()
        grid.mark(0, 0, "X")
        assert frozen.marker_at(0, 0) is None

    def test_as_matrix_view_is_read_only(self):
        grid = Grid(3)
        matrix = grid.as_matrix()
        assert isinstance(matrix, np.ndarray)
        with pytest.raises(ValueError):
            matrix[0, 0] = "X"

    def test_from_rows(self):
        grid = Grid.from_rows(["X.O", "...", "..X"])
        assert grid.rows() == [["X", None, "O"], [None] * 3, [None, None, "X"]]
        assert grid.available_cells() == [1, 3, 4, 5, 6, 7]
