"""Line array construction: project segments and symbol edges onto one axis.

Every interior, non-zero wire segment of the requested orientation
becomes one Line; every symbol bounding box contributes two fixed Lines
(its two edges of that orientation). Same-net segments that sit on top
of each other are linked so that they are moved as one.
"""

from __future__ import annotations

from collections import defaultdict

from wire_beautify.circuit.model import (
    BoundingBox,
    CircuitModel,
    Orientation,
    Wire,
    absolute_segments,
    segment_orientation,
)
from wire_beautify.layout.common import (
    SYMBOL_WIRE_ID,
    Interval,
    LayoutError,
    Line,
    LineInfo,
    LineKind,
    SegmentRef,
)
from wire_beautify.layout.config import DEFAULT_CONFIG, LayoutConfig


def line_to_wire(model: CircuitModel, line: Line) -> tuple[Wire, int] | None:
    """Return the wire and segment index behind *line*, if it is a segment."""
    if line.source is None:
        return None
    wire = model.wires.get(line.source.wire_id)
    if wire is None or not 0 <= line.source.index < len(wire.segments):
        raise LayoutError(
            f"Line {line.id} refers to segment {line.source.index} of wire "
            f"'{line.source.wire_id}', which does not exist"
        )
    return wire, line.source.index


def segment_kind(wire: Wire, index: int) -> LineKind:
    """Classify an interior segment.

    Manually routed segments never move. Segment 2 (or n-3) continues a
    straight nub across a zero-length segment, so it is fixed too.
    """
    segs = wire.segments
    n = len(segs)
    if segs[index].is_manual:
        return LineKind.FIXED_MANUAL
    if index == 2 and segs[1].is_zero:
        return LineKind.FIXED_ADJACENT_TO_NUB
    if index == n - 3 and segs[n - 2].is_zero:
        return LineKind.FIXED_ADJACENT_TO_NUB
    return LineKind.NORMAL


def wire_lines(orientation: Orientation, wire: Wire) -> list[Line]:
    """Lines for the selectable segments of one wire.

    End nubs (first and last segment) and zero-length segments are left out.
    """
    lines: list[Line] = []
    last = len(wire.segments) - 1
    for seg, (start, end) in zip(wire.segments, absolute_segments(wire)):
        if seg.index == 0 or seg.index == last or seg.is_zero:
            continue
        if segment_orientation(wire, seg.index) is not orientation:
            continue
        if orientation is Orientation.HORIZONTAL:
            p, bound = start[1], Interval.ordered(start[0], end[0])
        else:
            p, bound = start[0], Interval.ordered(start[1], end[1])
        lines.append(
            Line(
                id=0,
                p=p,
                bound=bound,
                orientation=orientation,
                kind=segment_kind(wire, seg.index),
                source=SegmentRef(wire.id, seg.index),
                net_key=wire.output_port,
                wire_id=wire.id,
            )
        )
    return lines


def bbox_to_lines(
    orientation: Orientation,
    box: BoundingBox,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[Line]:
    """Two fixed Lines for the edges of *box* with the given orientation.

    Each edge is shrunk by ``small_offset`` at both ends so that wires
    touching the box corners are not taken as overlapping it.
    """
    if orientation is Orientation.HORIZONTAL:
        edges = [
            (box.y, box.x, box.x + box.w),
            (box.y + box.h, box.x, box.x + box.w),
        ]
    else:
        edges = [
            (box.x, box.y, box.y + box.h),
            (box.x + box.w, box.y, box.y + box.h),
        ]
    return [
        Line(
            id=0,
            p=p,
            bound=Interval(lo + config.small_offset, hi - config.small_offset),
            orientation=orientation,
            kind=LineKind.FIXED,
            source=None,
            net_key="",
            wire_id=SYMBOL_WIRE_ID,
        )
        for p, lo, hi in edges
    ]


# ---------------------------------------------------------------------------
# Same-net linking
# ---------------------------------------------------------------------------


def _link_same_net_group(lines: list[Line], config: LayoutConfig) -> None:
    # The first normal line of each coincident set absorbs the rest; absorbed
    # lines become LINKED and can no longer absorb anything themselves.
    for a in range(len(lines)):
        for b in range(a + 1, len(lines)):
            la, lb = lines[a], lines[b]
            if (
                la.kind is LineKind.NORMAL
                and lb.kind is LineKind.NORMAL
                and la.wire_id != lb.wire_id
                and config.close(la.p, lb.p)
                and la.bound.overlaps(lb.bound)
            ):
                lb.kind = LineKind.LINKED
                la.bound = la.bound.union(lb.bound)
                la.same_net_links.append(lb)


def link_same_net_lines(
    lines: list[Line], config: LayoutConfig = DEFAULT_CONFIG
) -> list[Line]:
    """Link coincident normal lines of the same net (in different wires).

    Same-net segments may legitimately lie on top of each other and must
    never be separated. Linked peers are moved to whatever position their
    representative is given.
    """
    by_net: dict[str, list[Line]] = defaultdict(list)
    for line in lines:
        by_net[line.net_key].append(line)
    for group in by_net.values():
        _link_same_net_group(group, config)
    return lines


def make_lines(
    orientation: Orientation,
    model: CircuitModel,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[Line]:
    """All fixed and movable Lines of *orientation*, sorted by ``p``.

    Line ids are the positions in the returned list.
    """
    seg_lines: list[Line] = []
    for wire in model.wires.values():
        seg_lines.extend(wire_lines(orientation, wire))
    link_same_net_lines(seg_lines, config)

    sym_lines: list[Line] = []
    for box in model.symbols.values():
        sym_lines.extend(bbox_to_lines(orientation, box, config))

    lines = sorted(sym_lines + seg_lines, key=lambda line: line.p)
    for i, line in enumerate(lines):
        line.id = i
    return lines


def make_line_info(
    model: CircuitModel, config: LayoutConfig = DEFAULT_CONFIG
) -> LineInfo:
    """Build horizontal and vertical Line arrays plus a segment -> Line map."""
    h_lines = make_lines(Orientation.HORIZONTAL, model, config)
    v_lines = make_lines(Orientation.VERTICAL, model, config)
    line_map = {
        line.source: line.id
        for line in h_lines + v_lines
        if line.source is not None
    }
    return LineInfo(
        h_lines=h_lines, v_lines=v_lines, wires=model.wires, line_map=line_map
    )
