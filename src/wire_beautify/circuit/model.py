"""Data model for schematic circuits: symbols and orthogonal wires.

A wire is a start point plus an ordered list of segments. Segment
orientation alternates from the wire's initial orientation, and each
segment length is signed: a positive horizontal segment moves right, a
positive vertical segment moves down (increasing Y). Absolute endpoints
are found by accumulating lengths from the start point.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

ZERO_LENGTH: float = 1e-7
"""Segments shorter than this are zero-length nubs."""


class Orientation(Enum):
    """Orientation of a wire segment (or of a projected Line)."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def switch(self) -> Orientation:
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class RoutingMode(Enum):
    """How a segment was routed."""

    AUTO = "auto"
    MANUAL = "manual"


@dataclass(frozen=True)
class Segment:
    """One orthogonal segment of a wire."""

    index: int
    length: float
    mode: RoutingMode = RoutingMode.AUTO

    @property
    def is_zero(self) -> bool:
        return abs(self.length) < ZERO_LENGTH

    @property
    def is_manual(self) -> bool:
        return self.mode is RoutingMode.MANUAL


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned symbol bounding box (top-left corner plus size)."""

    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class Wire:
    """A wire driven by one output port."""

    id: str
    output_port: str
    start: tuple[float, float]
    initial_orientation: Orientation
    segments: tuple[Segment, ...] = ()

    def with_segments(self, segments: list[Segment] | tuple[Segment, ...]) -> Wire:
        """Return a copy of this wire with new segments (re-indexed)."""
        return replace(self, segments=renumber(segments))


@dataclass(frozen=True)
class CircuitModel:
    """Snapshot of a sheet: wires and symbol bounding boxes.

    Layout passes never mutate a model; they return a new one.
    """

    wires: dict[str, Wire] = field(default_factory=dict)
    symbols: dict[str, BoundingBox] = field(default_factory=dict)

    def with_wires(self, wires: dict[str, Wire]) -> CircuitModel:
        return replace(self, wires=wires)


# ---------------------------------------------------------------------------
# Segment geometry
# ---------------------------------------------------------------------------


def renumber(segments: list[Segment] | tuple[Segment, ...]) -> tuple[Segment, ...]:
    """Reassign segment indices 0..n-1 in list order."""
    return tuple(
        seg if seg.index == i else replace(seg, index=i)
        for i, seg in enumerate(segments)
    )


def segment_orientation(wire: Wire, index: int) -> Orientation:
    """Orientation of segment *index* of *wire*."""
    if index % 2 == 0:
        return wire.initial_orientation
    return wire.initial_orientation.switch()


def _advance(
    point: tuple[float, float], orientation: Orientation, length: float
) -> tuple[float, float]:
    x, y = point
    if orientation is Orientation.HORIZONTAL:
        return (x + length, y)
    return (x, y + length)


def absolute_segments(
    wire: Wire,
) -> list[tuple[tuple[float, float], tuple[float, float]]]:
    """Return (start, end) absolute points for every segment of *wire*."""
    points: list[tuple[tuple[float, float], tuple[float, float]]] = []
    pos = wire.start
    for seg in wire.segments:
        end = _advance(pos, segment_orientation(wire, seg.index), seg.length)
        points.append((pos, end))
        pos = end
    return points


def absolute_segment_pos(
    wire: Wire, index: int
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Return the (start, end) absolute points of one segment."""
    pos = wire.start
    for seg in wire.segments[:index]:
        pos = _advance(pos, segment_orientation(wire, seg.index), seg.length)
    end = _advance(pos, segment_orientation(wire, index), wire.segments[index].length)
    return pos, end


def wire_end(wire: Wire) -> tuple[float, float]:
    """Absolute end point of *wire*."""
    pos = wire.start
    for seg in wire.segments:
        pos = _advance(pos, segment_orientation(wire, seg.index), seg.length)
    return pos


def segment_is_nub_extension(wire: Wire, index: int) -> bool:
    """True if segment *index* is an end nub or continues one.

    Segment 2 (or n-3) continues the end nub in a straight line when the
    segment between them has zero length.
    """
    segs = wire.segments
    last = len(segs) - 1
    if index == 0 or index == last:
        return True
    if index == 2 and segs[1].is_zero:
        return True
    if last - index == 2 and segs[last - 1].is_zero:
        return True
    return False
