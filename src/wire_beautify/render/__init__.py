"""SVG rendering of circuit models."""

from wire_beautify.render.svg import render_svg

__all__ = ["render_svg"]
