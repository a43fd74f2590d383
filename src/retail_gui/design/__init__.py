"""Design values shared by widgets (table loading placeholders)."""

from .skeletons import TABLE_SKELETON_ROWS, placeholder_widths  # noqa: F401

__all__ = ["TABLE_SKELETON_ROWS", "placeholder_widths"]
