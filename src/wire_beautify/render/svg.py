"""SVG generation for circuit sheets using drawsvg."""

from __future__ import annotations

import drawsvg as draw

from wire_beautify.circuit.model import CircuitModel, absolute_segments
from wire_beautify.render.constants import (
    CANVAS_PADDING,
    LABEL_GAP,
    SYMBOL_CORNER_RADIUS,
)
from wire_beautify.render.style import Theme


def _content_bounds(model: CircuitModel) -> tuple[float, float, float, float]:
    xs: list[float] = []
    ys: list[float] = []
    for box in model.symbols.values():
        xs += [box.x, box.x + box.w]
        ys += [box.y, box.y + box.h]
    for wire in model.wires.values():
        xs.append(wire.start[0])
        ys.append(wire.start[1])
        for _, end in absolute_segments(wire):
            xs.append(end[0])
            ys.append(end[1])
    return min(xs), min(ys), max(xs), max(ys)


def render_svg(
    model: CircuitModel,
    theme: Theme,
    padding: float = CANVAS_PADDING,
    highlight_manual: bool = True,
) -> str:
    """Render symbols and wires of *model* to an SVG string."""
    if not model.wires and not model.symbols:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>\n'

    min_x, min_y, max_x, max_y = _content_bounds(model)
    dx, dy = padding - min_x, padding - min_y
    width = int(max_x - min_x + 2 * padding)
    height = int(max_y - min_y + 2 * padding)

    d = draw.Drawing(width, height)
    d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    for sid, box in model.symbols.items():
        d.append(draw.Rectangle(
            box.x + dx, box.y + dy, box.w, box.h,
            rx=SYMBOL_CORNER_RADIUS, ry=SYMBOL_CORNER_RADIUS,
            fill=theme.symbol_fill,
            stroke=theme.symbol_stroke,
            stroke_width=theme.symbol_stroke_width,
        ))
        d.append(draw.Text(
            sid,
            theme.label_font_size,
            box.x + dx, box.y + dy - LABEL_GAP,
            fill=theme.label_color,
            font_family=theme.label_font_family,
        ))

    for wire in model.wires.values():
        for seg, (start, end) in zip(wire.segments, absolute_segments(wire)):
            if seg.is_zero:
                continue
            color = (
                theme.manual_wire_color
                if highlight_manual and seg.is_manual
                else theme.wire_color
            )
            d.append(draw.Line(
                start[0] + dx, start[1] + dy, end[0] + dx, end[1] + dy,
                stroke=color,
                stroke_width=theme.wire_width,
                stroke_linecap="square",
            ))

    svg = d.as_svg()
    return svg if svg.endswith("\n") else svg + "\n"
