"""Write separated Line positions back into the wire model."""

from __future__ import annotations

from dataclasses import replace

from wire_beautify.circuit.model import (
    CircuitModel,
    Orientation,
    Wire,
    absolute_segment_pos,
    segment_orientation,
)
from wire_beautify.layout.common import LayoutError, Line


def with_linked_lines(changes: list[tuple[Line, float]]) -> list[tuple[Line, float]]:
    """Add the same new ``p`` for every same-net peer of each changed line."""
    expanded: list[tuple[Line, float]] = []
    for line, p in changes:
        expanded.append((line, p))
        expanded.extend((peer, p) for peer in line.same_net_links)
    return expanded


def move_segment(wire: Wire, index: int, orientation: Orientation, new_p: float) -> Wire:
    """Return *wire* with segment *index* moved to coordinate *new_p*.

    The two neighbouring segments are lengthened/shortened to follow, so
    the wire's endpoints and every other segment stay where they were.
    """
    if not 0 < index < len(wire.segments) - 1:
        raise LayoutError(
            f"Cannot move segment {index} of wire '{wire.id}' "
            f"({len(wire.segments)} segments)"
        )
    if segment_orientation(wire, index) is not orientation:
        raise LayoutError(
            f"Segment {index} of wire '{wire.id}' is not {orientation.value}"
        )
    start, _ = absolute_segment_pos(wire, index)
    p = start[1] if orientation is Orientation.HORIZONTAL else start[0]
    delta = new_p - p
    segs = list(wire.segments)
    segs[index - 1] = replace(segs[index - 1], length=segs[index - 1].length + delta)
    segs[index + 1] = replace(segs[index + 1], length=segs[index + 1].length - delta)
    return replace(wire, segments=tuple(segs))


def adjust_segments_in_model(
    orientation: Orientation,
    model: CircuitModel,
    changes: list[tuple[Line, float]],
) -> CircuitModel:
    """Apply (line, new p) changes, including linked peers, to a copy of *model*."""
    if not changes:
        return model
    wires = dict(model.wires)
    for line, new_p in with_linked_lines(changes):
        if line.source is None:
            raise LayoutError(f"Line {line.id} is a symbol edge and cannot move")
        wire = wires.get(line.source.wire_id)
        if wire is None:
            raise LayoutError(
                f"Line {line.id} refers to unknown wire '{line.source.wire_id}'"
            )
        wires[wire.id] = move_segment(wire, line.source.index, orientation, new_p)
    return model.with_wires(wires)
