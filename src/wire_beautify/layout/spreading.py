"""Assign new coordinates to the ordered members of a cluster."""

from __future__ import annotations

from wire_beautify.circuit.model import Wire
from wire_beautify.layout.common import Cluster, Line
from wire_beautify.layout.config import DEFAULT_CONFIG, LayoutConfig
from wire_beautify.layout.ordering import order_to_minimise_crossings


def calc_seg_positions(
    wires: dict[str, Wire],
    lines: list[Line],
    cluster: Cluster,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[tuple[Line, float]]:
    """Spread the cluster's lines out, spaced from fixed boundaries.

    Lines are kept ``max_segment_separation`` apart and the same distance
    from a fixed boundary. When both boundaries are too close for that,
    the lines share the available space evenly. A lone line with no
    boundary is left alone.

    Returns (line, new p) pairs in increasing ``p`` order.
    """
    segs = order_to_minimise_crossings(wires, lines, cluster.members, config)
    n = len(segs)
    upper, lower = cluster.upper_fixed, cluster.lower_fixed
    max_sep = config.max_segment_separation

    if upper is None and lower is None and n == 1:
        return []

    pts = [lines[i].p for i in segs]
    ideal_mid = (min(pts) + max(pts)) / 2
    half_width = (n - 1) * max_sep / 2
    ideal_start, ideal_end = ideal_mid - half_width, ideal_mid + half_width

    def from_start(start: float, sep: float) -> list[tuple[Line, float]]:
        return [(lines[seg], start + sep * i) for i, seg in enumerate(segs)]

    def from_middle(mid: float, sep: float) -> list[tuple[Line, float]]:
        return [
            (lines[seg], mid + sep * i - (n - 1) * sep / 2) for i, seg in enumerate(segs)
        ]

    def from_end(end: float, sep: float) -> list[tuple[Line, float]]:
        return [(lines[seg], end + sep * (i - (n - 1))) for i, seg in enumerate(segs)]

    if upper is not None and lower is not None and (upper - lower) / (n + 1) < max_sep:
        return from_middle((upper + lower) / 2, (upper - lower) / (n + 1))
    if lower is not None and lower + max_sep > ideal_start:
        return from_start(lower + max_sep, max_sep)
    if upper is not None and upper - max_sep < ideal_end:
        return from_end(upper - max_sep, max_sep)
    return from_middle(ideal_mid, max_sep)
