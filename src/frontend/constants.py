"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT = "#E8A33D"
SEARCHING_TEXT = "searching..."
