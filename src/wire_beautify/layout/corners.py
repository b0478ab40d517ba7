"""Remove small redundant corners from wires.

Separation can leave wires with more bends than they need. A window of
four segments whose two middle segments are short can be collapsed::

    ----              ------           ------               ----
        |      ==>          |                |         ===>     |
        ---                 |              ---                  |
           |                |                 |                 |

The first segment absorbs the length of the third, the fourth absorbs
the second, and the middle pair is deleted, so the wire still ends where
it did. A corner is only removed when the lengthened segments keep clear
of other wires and do not cross a symbol edge.
"""

from __future__ import annotations

import bisect
from dataclasses import replace

from wire_beautify.circuit.model import (
    CircuitModel,
    Orientation,
    Wire,
    absolute_segment_pos,
    segment_is_nub_extension,
    segment_orientation,
)
from wire_beautify.layout.common import (
    Extension,
    Interval,
    Line,
    LineInfo,
    LineKind,
    WireCorner,
)
from wire_beautify.layout.config import DEFAULT_CONFIG, LayoutConfig
from wire_beautify.layout.diagnostics import DiagnosticSink, TraceEvent, log_sink
from wire_beautify.layout.lines import make_line_info


def find_interval(lines: list[Line], p: float) -> int:
    """Index of the first line with ``line.p >= p`` (``len(lines)`` if none)."""
    return bisect.bisect_left(lines, p, key=lambda line: line.p)


# ---------------------------------------------------------------------------
# Extension checks
# ---------------------------------------------------------------------------


def check_extension_no_overlap(
    tolerance: float, ext: Extension, excluded_wire: str, info: LineInfo
) -> bool:
    """True if no parallel line (other than *excluded_wire*'s) is near *ext*."""
    lines = info.lines(ext.orientation)
    i = find_interval(lines, ext.p - tolerance)
    while i < len(lines) and lines[i].p <= ext.p + tolerance:
        line = lines[i]
        if line.wire_id != excluded_wire and ext.bound.near_overlaps(line.bound, tolerance):
            return False
        i += 1
    return True


def check_extension_no_crossings(
    tolerance: float, ext: Extension, excluded_wire: str, info: LineInfo
) -> bool:
    """True if *ext* crosses no symbol edge of the opposite orientation."""
    lines = info.lines(ext.orientation.switch())
    i = find_interval(lines, ext.bound.min - tolerance)
    while i < len(lines) and lines[i].p <= ext.bound.max + tolerance:
        line = lines[i]
        if (
            line.kind is LineKind.FIXED
            and line.wire_id != excluded_wire
            and line.bound.min <= ext.p <= line.bound.max
        ):
            return False
        i += 1
    return True


def is_segment_extension_ok(
    info: LineInfo,
    wire: Wire,
    index: int,
    length_change: float,
    config: LayoutConfig = DEFAULT_CONFIG,
    at_start: bool = False,
) -> bool:
    """Can segment *index* of *wire* change length by *length_change*?

    The segment grows or shrinks at its end, or at its start when
    *at_start* is set (the other end stays where it is). Shortening is
    always fine. Lengthening is checked over the new part only; reversing
    direction is checked over the whole new segment and refused for
    segments that extend an end nub.
    """
    length = wire.segments[index].length
    new_length = length + length_change
    orientation = segment_orientation(wire, index)
    start, end = absolute_segment_pos(wire, index)
    if orientation is Orientation.VERTICAL:
        p, start_c, end_c = start[0], start[1], end[1]
    else:
        p, start_c, end_c = start[1], start[0], end[0]
    # Work from the moving end towards the fixed one.
    if at_start:
        moving, fixed, step = start_c, end_c, -length_change
    else:
        moving, fixed, step = end_c, start_c, length_change

    def has_room(b1: float, b2: float) -> bool:
        ext = Extension(p=p, orientation=orientation, bound=Interval.ordered(b1, b2))
        tol = config.extension_tolerance
        return check_extension_no_overlap(
            tol, ext, wire.id, info
        ) and check_extension_no_crossings(tol, ext, wire.id, info)

    same_direction = (new_length > 0) == (length > 0) and new_length != 0
    if same_direction and abs(new_length) < abs(length):
        return True
    if same_direction:
        return has_room(moving + step, moving)
    if segment_is_nub_extension(wire, index):
        return False
    return has_room(moving + step, fixed)


# ---------------------------------------------------------------------------
# Corner search and removal
# ---------------------------------------------------------------------------


def find_wire_corner(
    info: LineInfo,
    wire: Wire,
    config: LayoutConfig = DEFAULT_CONFIG,
    sink: DiagnosticSink = log_sink,
) -> WireCorner | None:
    """First removable corner in *wire*, or None.

    Windows start at segments 1..n-5, so neither end nub is ever touched.
    """
    segs = wire.segments
    n = len(segs)
    if n < config.min_corner_wire_segments:
        return None

    def reject(start: int, reason: str) -> None:
        sink(TraceEvent("corners", "corner rejected", {
            "wire": wire.id, "start": start, "reason": reason,
        }))

    for start in range(1, n - 4):
        if segs[start].is_zero or segs[start + 3].is_zero:
            reject(start, "zero-length end segment")
            continue
        if any(segs[i].is_manual for i in range(start, start + 4)):
            reject(start, "manual segment")
            continue
        deleted1, deleted2 = segs[start + 1], segs[start + 2]
        if max(abs(deleted1.length), abs(deleted2.length)) > config.max_corner_size:
            reject(start, "corner too large")
            continue
        start_change, end_change = deleted2.length, deleted1.length
        if not (
            is_segment_extension_ok(info, wire, start, start_change, config)
            and is_segment_extension_ok(
                info, wire, start + 3, end_change, config, at_start=True
            )
        ):
            reject(start, "extension blocked")
            continue
        return WireCorner(
            wire_id=wire.id,
            start=start,
            orientation=segment_orientation(wire, start),
            start_change=start_change,
            end_change=end_change,
        )
    return None


def remove_corner(wire: Wire, corner: WireCorner) -> Wire:
    """Apply *corner* to *wire*: grow the outer pair, drop the middle pair."""
    segs = list(wire.segments)
    first, last = segs[corner.start], segs[corner.start + 3]
    segs[corner.start] = replace(first, length=first.length + corner.start_change)
    segs[corner.start + 3] = replace(last, length=last.length + corner.end_change)
    del segs[corner.start + 1 : corner.start + 3]
    return wire.with_segments(segs)


def remove_model_corners(
    model: CircuitModel,
    config: LayoutConfig = DEFAULT_CONFIG,
    sink: DiagnosticSink = log_sink,
) -> CircuitModel:
    """Remove at most one corner per wire, checked against one snapshot."""
    info = make_line_info(model, config)
    corners = [
        corner
        for wire in model.wires.values()
        if (corner := find_wire_corner(info, wire, config, sink)) is not None
    ]
    if not corners:
        return model
    wires = dict(model.wires)
    for corner in corners:
        sink(TraceEvent("corners", "corner removed", {
            "wire": corner.wire_id, "start": corner.start,
        }))
        wires[corner.wire_id] = remove_corner(wires[corner.wire_id], corner)
    return model.with_wires(wires)
