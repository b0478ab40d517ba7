"""Order the Lines of a cluster to minimise wire crossings.

Each segment's wire turns off both of its ends, towards larger or
smaller ``p``. Whether two parallel segments cross their neighbours'
turns depends on which one is placed above the other, so a pairwise
score is accumulated per line and the cluster is sorted by it.
"""

from __future__ import annotations

from wire_beautify.circuit.model import Wire
from wire_beautify.layout.common import LayoutError, Line
from wire_beautify.layout.config import DEFAULT_CONFIG, LayoutConfig


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def turn_dirs(line: Line, wires: dict[str, Wire]) -> tuple[int, int]:
    """Direction (+1/-1/0) the wire turns at the max and min end of *line*.

    Returned as ``(at_max_end, at_min_end)``. +1 means the wire leaves
    that end towards increasing ``p``.
    """
    if line.source is None:
        raise LayoutError(f"Line {line.id} has no source segment to turn from")
    wire = wires.get(line.source.wire_id)
    index = line.source.index
    if wire is None or not 0 < index < len(wire.segments) - 1:
        raise LayoutError(
            f"Line {line.id}: segment {index} of wire "
            f"'{line.source.wire_id}' has no neighbours to turn into"
        )
    segs = wire.segments
    # The previous segment leads *into* the line, so its change is inverted.
    after = segs[index + 1].length
    before = -segs[index - 1].length
    if segs[index].length > 0:
        return _sign(after), _sign(before)
    return _sign(before), _sign(after)


def lines_maybe_meeting(
    end1: tuple[int, float, float],
    end2: tuple[int, float, float],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> float:
    """Score two segment ends, each given as ``(turn_dir, bound, p)``.

    0 if the ends do not line up, +1 if the wires turn towards each other
    there (and so might overlap), otherwise -1.
    """
    turn1, bound1, p1 = end1
    turn2, bound2, p2 = end2
    if not config.close(bound1, bound2):
        return 0.0
    if (p1 > p2 and turn1 == -1 and turn2 == 1) or (
        p1 <= p2 and turn1 == 1 and turn2 == -1
    ):
        return 1.0
    return -1.0


def crossing_score(
    line1: Line,
    line2: Line,
    wires: dict[str, Wire],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> float:
    """Pairwise ordering score of *line1* against *line2*.

    Positive when *line1* should sit above (larger ``p``), negative when
    below, 0 when either order gives one crossing.
    """
    max1, min1 = turn_dirs(line1, wires)
    max2, min2 = turn_dirs(line2, wires)

    # Sum the turns at the two inner ends, inverting those that belong to
    # line2; halving gives the crossing sign.
    inside_min = line1.bound.min > line2.bound.min
    inside_max = line1.bound.max < line2.bound.max
    if inside_min and inside_max:
        total = min1 + max1
    elif inside_min:
        total = min1 - max2
    elif inside_max:
        total = -min2 + max1
    else:
        total = -min2 + max2
    crossings = int(total / 2)

    ends1 = [(max1, line1.bound.max, line1.p), (min1, line1.bound.min, line1.p)]
    ends2 = [(max2, line2.bound.max, line2.p), (min2, line2.bound.min, line2.p)]
    meeting = sum(lines_maybe_meeting(e1, e2, config) for e1 in ends1 for e2 in ends2)

    return crossings + config.meeting_weight * meeting


def order_to_minimise_crossings(
    wires: dict[str, Wire],
    lines: list[Line],
    members: list[int],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[int]:
    """Return *members* ordered for increasing ``p`` placement."""
    members = sorted(set(members))
    if len(members) == 1:
        return members

    score = [0.0] * len(members)
    for i in range(len(members)):
        for j in range(i):
            num = crossing_score(lines[members[i]], lines[members[j]], wires, config)
            score[i] += num
            score[j] -= num

    order = sorted(range(len(members)), key=lambda k: score[k])
    return [members[k] for k in order]
