"""Tunable geometry configuration for a layout pass."""

from __future__ import annotations

from dataclasses import dataclass

from wire_beautify.layout.constants import (
    CLOSE_TOLERANCE,
    EXTENSION_TOLERANCE,
    MAX_CORNER_SIZE,
    MAX_SEGMENT_SEPARATION,
    MEETING_WEIGHT,
    MIN_CORNER_WIRE_SEGMENTS,
    OVERLAP_TOLERANCE,
    SEPARATION_ROUNDS,
    SMALL_OFFSET,
)


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry tolerances and limits, read-only for the whole pipeline."""

    max_segment_separation: float = MAX_SEGMENT_SEPARATION
    small_offset: float = SMALL_OFFSET
    close_tolerance: float = CLOSE_TOLERANCE
    overlap_tolerance: float = OVERLAP_TOLERANCE
    extension_tolerance: float = EXTENSION_TOLERANCE
    max_corner_size: float = MAX_CORNER_SIZE
    meeting_weight: float = MEETING_WEIGHT
    min_corner_wire_segments: int = MIN_CORNER_WIRE_SEGMENTS
    separation_rounds: int = SEPARATION_ROUNDS

    def close(self, a: float, b: float) -> bool:
        return abs(a - b) < self.close_tolerance


DEFAULT_CONFIG = LayoutConfig()
