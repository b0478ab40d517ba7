"""Separate overlapping fixed segments that the cluster pass leaves alone.

Segments next to a zero-length nub are not moved by clustering, because
moving them would add a visible bend. When two of them, from different
nets, still lie on top of each other, one of them is nudged into the
free space beside it.
"""

from __future__ import annotations

from wire_beautify.circuit.model import CircuitModel, Orientation
from wire_beautify.layout.common import Line, LineKind
from wire_beautify.layout.config import DEFAULT_CONFIG, LayoutConfig
from wire_beautify.layout.lines import make_lines
from wire_beautify.layout.patch import adjust_segments_in_model


def _find_obstacle(
    lines: list[Line], line: Line, exclude: Line, step: int, max_offset: float
) -> int | None:
    i = line.id + step
    while 0 <= i < len(lines):
        other = lines[i]
        if abs(other.p - line.p) > 2 * max_offset:
            return None
        if other is not exclude and other.bound.overlaps(line.bound):
            return i
        i += step
    return None


def space_from_line(
    lines: list[Line], line: Line, exclude: Line, max_offset: float
) -> float:
    """Free space beside *line*, signed towards the roomier side.

    Returns *max_offset* (or its negative) when nothing overlapping is
    found on that side, otherwise the signed distance to the farther of
    the two nearest overlapping lines.
    """
    above = _find_obstacle(lines, line, exclude, 1, max_offset)
    below = _find_obstacle(lines, line, exclude, -1, max_offset)
    if above is None:
        return max_offset
    if below is None:
        return -max_offset
    up, down = lines[above].p - line.p, lines[below].p - line.p
    return up if abs(up) > abs(down) else down


def fixed_segment_changes(
    lines: list[Line], config: LayoutConfig = DEFAULT_CONFIG
) -> list[tuple[Line, float]]:
    """(line, new p) moves for each coincident pair of nub-adjacent lines."""
    max_offset = 2 * config.max_segment_separation
    changes: list[tuple[Line, float]] = []
    for line1, line2 in zip(lines, lines[1:]):
        if not (
            line1.kind is LineKind.FIXED_ADJACENT_TO_NUB
            and line2.kind is LineKind.FIXED_ADJACENT_TO_NUB
            and abs(line1.p - line2.p) < config.overlap_tolerance
            and line1.net_key != line2.net_key
            and line1.bound.overlaps(line2.bound)
        ):
            continue
        space1 = space_from_line(lines, line1, line2, max_offset)
        space2 = space_from_line(lines, line2, line1, max_offset)
        if abs(space1) > abs(space2):
            changes.append((line1, line1.p + space1 * 0.5))
        else:
            changes.append((line2, line1.p + space2 * 0.5))
    return changes


def separate_fixed_segments(
    orientation: Orientation,
    model: CircuitModel,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> CircuitModel:
    """Nudge apart overlapping nub-adjacent segments of one orientation."""
    lines = make_lines(orientation, model, config)
    return adjust_segments_in_model(
        orientation, model, fixed_segment_changes(lines, config)
    )
