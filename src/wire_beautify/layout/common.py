"""Shared types for the segment separation passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from wire_beautify.circuit.model import Orientation, Wire

SYMBOL_WIRE_ID = ""
"""Wire id carried by Lines that come from symbol edges."""


class LayoutError(RuntimeError):
    """A structural invariant was broken; the layout pass is abandoned."""


@dataclass(frozen=True)
class Interval:
    """Closed interval along one axis (``min <= max``)."""

    min: float
    max: float

    @classmethod
    def ordered(cls, a: float, b: float) -> Interval:
        return cls(a, b) if a <= b else cls(b, a)

    def overlaps(self, other: Interval) -> bool:
        return self.min <= other.max and other.min <= self.max

    def near_overlaps(self, other: Interval, tolerance: float) -> bool:
        """Overlap test with both intervals widened by *tolerance*."""
        return self.min - tolerance <= other.max and other.min - tolerance <= self.max

    def union(self, other: Interval) -> Interval:
        return Interval(min(self.min, other.min), max(self.max, other.max))


class LineKind(Enum):
    """What a Line came from, and therefore whether it may move."""

    FIXED = "fixed"  # symbol edge
    FIXED_MANUAL = "fixed_manual"
    FIXED_ADJACENT_TO_NUB = "fixed_adjacent_to_nub"
    NORMAL = "normal"
    LINKED = "linked"

    @property
    def is_fixed(self) -> bool:
        return self in (
            LineKind.FIXED,
            LineKind.FIXED_MANUAL,
            LineKind.FIXED_ADJACENT_TO_NUB,
        )


@dataclass(frozen=True)
class SegmentRef:
    """Identity of a wire segment: owning wire plus segment index."""

    wire_id: str
    index: int


@dataclass(eq=False)
class Line:
    """A wire segment or symbol edge projected onto one orientation.

    ``p`` is the coordinate on the perpendicular axis (Y for a horizontal
    line) and ``bound`` the extent along the line's own axis. Lines live
    only for the pass that built them.
    """

    id: int
    p: float
    bound: Interval
    orientation: Orientation
    kind: LineKind
    source: SegmentRef | None
    net_key: str
    wire_id: str
    # Peers (same net, coincident, other wires) that move with this line
    same_net_links: list[Line] = field(default_factory=list)


@dataclass
class Cluster:
    """Movable lines (by index into the pass's Line array) spread together."""

    members: list[int]
    bound: Interval
    upper_fixed: float | None = None
    lower_fixed: float | None = None


@dataclass(frozen=True)
class WireCorner:
    """A removable corner: segments start+1 and start+2 are deleted."""

    wire_id: str
    start: int
    orientation: Orientation
    start_change: float
    end_change: float


@dataclass(frozen=True)
class Extension:
    """The new stretch of a segment being lengthened."""

    p: float
    orientation: Orientation
    bound: Interval


@dataclass
class LineInfo:
    """Both orientations' Line arrays for one model snapshot."""

    h_lines: list[Line]
    v_lines: list[Line]
    wires: dict[str, Wire]
    line_map: dict[SegmentRef, int]

    def lines(self, orientation: Orientation) -> list[Line]:
        if orientation is Orientation.HORIZONTAL:
            return self.h_lines
        return self.v_lines
