import random

from retail_gui.design.skeletons import (
    MAX_WIDTH_RATIO,
    MIN_WIDTH_RATIO,
    TABLE_SKELETON_ROWS,
    placeholder_widths,
)


def test_table_placeholder_constants():
    assert TABLE_SKELETON_ROWS == 5
    assert (MIN_WIDTH_RATIO, MAX_WIDTH_RATIO) == (0.6, 1.0)


def test_placeholder_widths_shape_and_bounds():
    widths = placeholder_widths(TABLE_SKELETON_ROWS, 4, random.Random(1))
    assert len(widths) == 5
    assert all(len(row) == 4 for row in widths)
    assert all(0.6 <= w <= 1.0 for row in widths for w in row)


def test_placeholder_widths_deterministic_with_seed():
    assert placeholder_widths(2, 3, random.Random(42)) == placeholder_widths(
        2, 3, random.Random(42)
    )


def test_placeholder_widths_zero_columns():
    assert placeholder_widths(5, 0) == [[], [], [], [], []]
