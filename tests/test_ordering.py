"""Tests for crossing-minimising order and position spreading."""

from __future__ import annotations

import pytest
from wire_validator import make_model, make_wire

from wire_beautify.circuit.model import BoundingBox, Orientation
from wire_beautify.layout.common import Cluster, Interval, LayoutError, SegmentRef
from wire_beautify.layout.config import LayoutConfig
from wire_beautify.layout.lines import make_lines
from wire_beautify.layout.ordering import (
    crossing_score,
    lines_maybe_meeting,
    order_to_minimise_crossings,
    turn_dirs,
)
from wire_beautify.layout.spreading import calc_seg_positions

V = Orientation.VERTICAL

SEP10 = LayoutConfig(max_segment_separation=10.0)


def _wrapping_pair(outer_turns_left: bool):
    """An outer U-shaped wire around an inner one, vertical parts at x=50.

    With *outer_turns_left* the outer wire opens to the left and the inner
    wire to the right; otherwise the other way round.
    """
    if outer_turns_left:
        outer = make_wire("O", (0, 0), [50, 40, -50])
        inner = make_wire("I", (100, 5), [-50, 30, 50])
    else:
        outer = make_wire("O", (100, 0), [-50, 40, 50])
        inner = make_wire("I", (0, 5), [50, 30, -50])
    return make_model(outer, inner)


def _stacked_pair():
    """Two wires whose middle segments coincide at x=100, y 10..50."""
    return make_model(
        make_wire("A", (80, 10), [20, 40, 20]),
        make_wire("B", (70, 10), [30, 40, 30]),
    )


# ---------------------------------------------------------------------------
# Turn directions and scores
# ---------------------------------------------------------------------------


class TestTurnDirs:
    def test_wire_turning_left_at_both_ends(self):
        model = make_model(make_wire("W", (0, 0), [50, 40, -50]))
        (line,) = make_lines(V, model)
        assert turn_dirs(line, model.wires) == (-1, -1)

    def test_wire_turning_right_at_both_ends(self):
        model = make_model(make_wire("W", (100, 5), [-50, 30, 50]))
        (line,) = make_lines(V, model)
        assert turn_dirs(line, model.wires) == (1, 1)

    def test_zig_zag(self):
        model = make_model(make_wire("W", (80, 10), [20, 40, 20]))
        (line,) = make_lines(V, model)
        # Leaves the bottom (max) end to the right, arrived from the left
        assert turn_dirs(line, model.wires) == (1, -1)

    def test_negative_length_swaps_ends(self):
        model = make_model(make_wire("W", (0, 40), [50, -40, -50]))
        (line,) = make_lines(V, model)
        assert turn_dirs(line, model.wires) == (-1, -1)

    def test_symbol_edge_has_no_turns(self):
        model = make_model(symbols={"U": BoundingBox(0, 0, 10, 10)})
        line = make_lines(V, model)[0]
        with pytest.raises(LayoutError, match="no source"):
            turn_dirs(line, model.wires)

    def test_end_segment_has_no_turns(self):
        model = make_model(make_wire("W", (0, 0), [50, 40, -50]))
        (line,) = make_lines(V, model)
        line.source = SegmentRef("W", 0)
        with pytest.raises(LayoutError, match="no neighbours"):
            turn_dirs(line, model.wires)


class TestMaybeMeeting:
    @pytest.mark.parametrize(
        "end1, end2, expected",
        [
            ((1, 10.0, 0.0), (-1, 10.0, 5.0), 1.0),
            ((-1, 10.0, 5.0), (1, 10.0, 0.0), 1.0),
            ((1, 10.0, 0.0), (1, 10.0, 5.0), -1.0),
            ((-1, 10.0, 0.0), (1, 10.0, 5.0), -1.0),
            ((1, 10.0, 0.0), (-1, 20.0, 5.0), 0.0),
        ],
    )
    def test_scores(self, end1, end2, expected):
        assert lines_maybe_meeting(end1, end2) == expected


class TestCrossingScore:
    def test_inner_line_prefers_side_it_turns_to(self):
        model = _wrapping_pair(outer_turns_left=True)
        outer, inner = make_lines(V, model)
        assert crossing_score(inner, outer, model.wires) == 1

    def test_coincident_zig_zags_prefer_meeting_order(self):
        model = _stacked_pair()
        a, b = make_lines(V, model)
        # One crossing either way, but both ends line up with the same turn
        assert crossing_score(b, a, model.wires) == pytest.approx(-1.0)

    def test_meeting_weight_scales_meeting_term(self):
        model = _stacked_pair()
        a, b = make_lines(V, model)
        config = LayoutConfig(meeting_weight=0.0)
        assert crossing_score(b, a, model.wires, config) == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrder:
    def test_single_member(self):
        model = _stacked_pair()
        lines = make_lines(V, model)
        assert order_to_minimise_crossings(model.wires, lines, [1]) == [1]

    def test_inner_wire_placed_on_its_open_side(self):
        model = _wrapping_pair(outer_turns_left=True)
        lines = make_lines(V, model)
        order = order_to_minimise_crossings(model.wires, lines, [0, 1])
        assert [lines[i].wire_id for i in order] == ["O", "I"]

    def test_mirrored_shapes_reverse_order(self):
        model = _wrapping_pair(outer_turns_left=False)
        lines = make_lines(V, model)
        order = order_to_minimise_crossings(model.wires, lines, [0, 1])
        assert [lines[i].wire_id for i in order] == ["I", "O"]

    def test_duplicate_members_ignored(self):
        model = _stacked_pair()
        lines = make_lines(V, model)
        assert sorted(order_to_minimise_crossings(model.wires, lines, [0, 1, 1])) == [0, 1]


# ---------------------------------------------------------------------------
# Spreading
# ---------------------------------------------------------------------------


class TestSpreading:
    def _positions(self, upper=None, lower=None, members=(0, 1), config=SEP10):
        model = _stacked_pair()
        lines = make_lines(V, model)
        cluster = Cluster(
            members=list(members),
            bound=Interval(10, 50),
            upper_fixed=upper,
            lower_fixed=lower,
        )
        return [
            (line.wire_id, p)
            for line, p in calc_seg_positions(model.wires, lines, cluster, config)
        ]

    def test_no_boundaries_centred_on_lines(self):
        assert self._positions() == [
            ("B", pytest.approx(95.0)),
            ("A", pytest.approx(105.0)),
        ]

    def test_tight_boundaries_share_space(self):
        assert self._positions(upper=110.0, lower=90.0) == [
            ("B", pytest.approx(290 / 3)),
            ("A", pytest.approx(310 / 3)),
        ]

    def test_wide_boundaries_ignored(self):
        assert self._positions(upper=200.0, lower=0.0) == [
            ("B", pytest.approx(95.0)),
            ("A", pytest.approx(105.0)),
        ]

    def test_pushed_up_from_lower_boundary(self):
        assert self._positions(lower=92.0) == [
            ("B", pytest.approx(102.0)),
            ("A", pytest.approx(112.0)),
        ]

    def test_pushed_down_from_upper_boundary(self):
        assert self._positions(upper=108.0) == [
            ("B", pytest.approx(88.0)),
            ("A", pytest.approx(98.0)),
        ]

    def test_lone_line_without_boundary_unchanged(self):
        assert self._positions(members=(0,)) == []

    @pytest.mark.parametrize(
        "upper, lower, expected",
        [(None, 95.0, 102.0), (105.0, None, 98.0), (None, 80.0, 100.0)],
    )
    def test_lone_line_near_boundary(self, upper, lower, expected):
        config = LayoutConfig(max_segment_separation=7.0)
        ((_, p),) = self._positions(upper, lower, members=(0,), config=config)
        assert p == pytest.approx(expected)

    def test_spacing_never_below_separation_when_room(self):
        positions = [p for _, p in self._positions(upper=300.0, lower=-300.0)]
        assert positions[1] - positions[0] == pytest.approx(10.0)
