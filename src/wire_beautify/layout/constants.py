"""Layout constants used across layout modules.

Geometry values are in sheet units. They are the defaults for
``LayoutConfig``; pass a config to override them.
"""

# ---------------------------------------------------------------------------
# Segment separation
# ---------------------------------------------------------------------------
MAX_SEGMENT_SEPARATION: float = 7.0
"""Target gap between separated parallel segments."""

SMALL_OFFSET: float = 0.0001
"""Inward shrink applied to symbol edges, and slack on cluster gap tests."""

CLOSE_TOLERANCE: float = 0.0001
"""Two coordinates closer than this are the same coordinate."""

OVERLAP_TOLERANCE: float = 2.0
"""Fixed segments closer than this still overlap visually."""

MEETING_WEIGHT: float = 1.0
"""Weight (and sign) of the turn-towards-each-other term in crossing scores."""

SEPARATION_ROUNDS: int = 2
"""Vertical + horizontal separation is repeated this many times."""

# ---------------------------------------------------------------------------
# Corner removal
# ---------------------------------------------------------------------------
EXTENSION_TOLERANCE: float = 3.0
"""Clearance an extended segment must keep from other wires and symbols."""

MAX_CORNER_SIZE: float = 100.0
"""Longest segment that may be deleted when removing a corner."""

MIN_CORNER_WIRE_SEGMENTS: int = 9
"""Wires with fewer segments are never searched for corners."""
