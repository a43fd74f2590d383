"""Reusable Qt widgets: skeleton placeholders, empty states, the guard prompt."""
