"""Render constants used by svg.py."""

CANVAS_PADDING: float = 40.0
"""Default padding around the sheet content."""

SYMBOL_CORNER_RADIUS: float = 3.0
"""Corner radius of symbol rectangles."""

LABEL_GAP: float = 4.0
"""Gap between a symbol's top edge and its label baseline."""
