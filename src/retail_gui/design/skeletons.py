"""Table loading placeholder geometry.

While a table's data is loading it shows ``TABLE_SKELETON_ROWS`` rows of
grey bars, one per column, each drawn at a random fraction of the column
width so the rows read like uneven text. No Qt imports; the widget in
``retail_gui.components.skeleton_loader`` paints from these values.
"""

from __future__ import annotations

import random
from typing import List, Optional

__all__ = [
    "TABLE_SKELETON_ROWS",
    "MIN_WIDTH_RATIO",
    "MAX_WIDTH_RATIO",
    "BAR_HEIGHT",
    "BAR_RADIUS",
    "placeholder_widths",
]

TABLE_SKELETON_ROWS = 5
MIN_WIDTH_RATIO = 0.6
MAX_WIDTH_RATIO = 1.0

# Pixel geometry of one placeholder bar
BAR_HEIGHT = 12
BAR_RADIUS = 4


def placeholder_widths(
    rows: int, cols: int, rng: Optional[random.Random] = None
) -> List[List[float]]:
    """Width ratio per placeholder cell, uniformly drawn from 60-100%."""
    source = rng if rng is not None else random
    return [
        [source.uniform(MIN_WIDTH_RATIO, MAX_WIDTH_RATIO) for _ in range(max(0, cols))]
        for _ in range(max(0, rows))
    ]
