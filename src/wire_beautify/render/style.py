"""Theme and style constants for circuit rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a rendered sheet."""

    name: str
    background_color: str
    symbol_fill: str
    symbol_stroke: str
    symbol_stroke_width: float
    wire_color: str
    wire_width: float
    manual_wire_color: str
    label_color: str
    label_font_family: str
    label_font_size: float
