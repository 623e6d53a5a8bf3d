"""Tests for layout strategies."""

from glyph_picker.layout import (
    RowTableLayout,
    WrappingGridLayout,
    estimate_columns,
    make_layout,
    measure_cell_width,
)
from glyph_picker.projector import project
from glyph_picker.types import LayoutMode


class TestEstimateColumns:
    def test_divides_width(self):
        assert estimate_columns(30, 3) == 10
        assert estimate_columns(31, 3) == 10

    def test_never_below_one(self):
        assert estimate_columns(2, 3) == 1
        assert estimate_columns(0) == 1
        assert estimate_columns(None) == 1


class TestMeasureCellWidth:
    def test_wide_glyphs(self, shelf_tree):
        assert measure_cell_width(project(shelf_tree)) == 3

    def test_empty_projection(self):
        assert measure_cell_width(project(None)) == 3


class TestLayouts:
    def test_table_one_row_per_leaf(self, shelf_tree):
        rows = RowTableLayout().rows(project(shelf_tree))
        assert rows == [range(0, 3), range(3, 4), range(4, 9)]

    def test_grid_wraps_within_leaf(self, shelf_tree):
        rows = WrappingGridLayout(columns=2).rows(project(shelf_tree))
        assert rows == [
            range(0, 2),
            range(2, 3),
            range(3, 4),
            range(4, 6),
            range(6, 8),
            range(8, 9),
        ]

    def test_grid_wide_enough_matches_table(self, shelf_tree):
        projection = project(shelf_tree)
        assert WrappingGridLayout(columns=10).rows(projection) == RowTableLayout().rows(projection)

    def test_grid_columns_floor(self):
        assert WrappingGridLayout(columns=0).columns == 1

    def test_make_layout(self):
        assert isinstance(make_layout("table"), RowTableLayout)
        grid = make_layout(LayoutMode.GRID, width=12, cell_width=3)
        assert isinstance(grid, WrappingGridLayout)
        assert grid.columns == 4
