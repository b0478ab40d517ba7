"""Tests for segment clustering.

Clusters are built from hand-made Line arrays so that each scenario can
place fixed lines, linked lines and gaps exactly.
"""

from __future__ import annotations

from collections import Counter

import pytest

import wire_beautify.layout.clusters as clusters_module
from wire_beautify.circuit.model import Orientation
from wire_beautify.layout.clusters import (
    expand_cluster,
    make_clusters,
    merge_clusters,
    merge_localities,
)
from wire_beautify.layout.common import (
    Cluster,
    Interval,
    LayoutError,
    Line,
    LineKind,
    SegmentRef,
)
from wire_beautify.layout.config import LayoutConfig

N = LineKind.NORMAL
F = LineKind.FIXED
L = LineKind.LINKED


def _lines(*rows: tuple[float, float, float, LineKind]) -> list[Line]:
    """Lines from (p, bound min, bound max, kind), already in p order."""
    return [
        Line(
            id=i,
            p=p,
            bound=Interval(lo, hi),
            orientation=Orientation.VERTICAL,
            kind=kind,
            source=None if kind is F else SegmentRef(f"W{i}", 1),
            net_key=f"net{i}",
            wire_id=f"W{i}",
        )
        for i, (p, lo, hi, kind) in enumerate(rows)
    ]


def _members(clusters: list[Cluster]) -> list[list[int]]:
    return [sorted(c.members) for c in clusters]


# ---------------------------------------------------------------------------
# expand_cluster
# ---------------------------------------------------------------------------


class TestExpandCluster:
    def test_upward_absorbs_overlapping_lines(self):
        lines = _lines((0, 0, 10, N), (3, 5, 15, N), (6, 12, 20, N))
        cluster = expand_cluster(lines, 0)
        assert sorted(cluster.members) == [0, 1, 2]
        assert cluster.bound == Interval(0, 20)

    def test_upward_stops_at_fixed_line(self):
        lines = _lines((0, 0, 10, N), (2, 0, 10, F), (4, 0, 10, N))
        cluster = expand_cluster(lines, 0)
        assert cluster.members == [0]
        assert cluster.upper_fixed == 2
        assert cluster.lower_fixed is None

    def test_gap_limit_grows_with_cluster(self):
        config = LayoutConfig(max_segment_separation=5.0)
        # 14 is beyond 2 * 5 from the seed for a single member, but within
        # 3 * 5 once the line at 4 has joined.
        lines = _lines((0, 0, 10, N), (4, 0, 10, N), (14, 0, 10, N), (30, 0, 10, N))
        cluster = expand_cluster(lines, 0, config)
        assert sorted(cluster.members) == [0, 1, 2]

    def test_downward_does_not_pass_lowest_member(self):
        lines = _lines((0, 0, 10, N), (1, 0, 10, N), (2, 0, 10, N))
        start = Cluster(members=[1, 2], bound=Interval(0, 10))
        cluster = expand_cluster(lines, 2, downwards_from=start)
        assert sorted(cluster.members) == [1, 2]

    def test_downward_finds_lower_fixed_below_lowest(self):
        lines = _lines((0, 0, 10, F), (1, 0, 10, N), (2, 0, 10, N))
        start = Cluster(members=[1, 2], bound=Interval(0, 10), upper_fixed=9.0)
        cluster = expand_cluster(lines, 2, downwards_from=start)
        assert cluster.lower_fixed == 0
        assert cluster.upper_fixed == 9.0


# ---------------------------------------------------------------------------
# make_clusters
# ---------------------------------------------------------------------------


class TestMakeClusters:
    def test_overlapping_neighbours_form_one_cluster(self):
        lines = _lines((0, 0, 10, N), (3, 5, 15, N))
        clusters = make_clusters(lines)
        assert _members(clusters) == [[0, 1]]
        assert clusters[0].upper_fixed is None and clusters[0].lower_fixed is None

    def test_large_gap_splits_clusters(self):
        lines = _lines((0, 0, 10, N), (100, 0, 10, N))
        assert _members(make_clusters(lines)) == [[0], [1]]

    def test_same_p_without_overlap_splits_clusters(self):
        lines = _lines((0, 0, 10, N), (0, 20, 30, N))
        assert _members(make_clusters(lines)) == [[0], [1]]

    def test_fixed_line_bounds_both_sides(self):
        lines = _lines((0, 0, 10, N), (2, 0, 10, F), (4, 0, 10, N))
        below, above = make_clusters(lines)
        assert below.members == [0] and below.upper_fixed == 2
        assert above.members == [2] and above.lower_fixed == 2

    def test_linked_lines_are_skipped(self):
        lines = _lines((0, 0, 10, N), (1, 0, 10, L), (2, 0, 10, N))
        assert _members(make_clusters(lines)) == [[0, 2]]

    def test_fixed_only_array_has_no_clusters(self):
        lines = _lines((0, 0, 10, F), (5, 0, 10, LineKind.FIXED_MANUAL))
        assert make_clusters(lines) == []

    def test_wider_bound_splits_off_lower_cluster(self):
        # The fixed line does not overlap the seed, so the upward search steps
        # past it; searching back down with the wider bound hits it.
        lines = _lines((0, 0, 10, N), (1, 20, 30, F), (2, 5, 25, N))
        upper, lower = make_clusters(lines)
        assert upper.members == [2] and upper.lower_fixed == 1
        assert lower.members == [0] and lower.upper_fixed == 1

    def test_every_normal_line_in_exactly_one_cluster(self):
        rows = [(-5.0, -100.0, 100.0, F)]
        for k in range(24):
            lo = (k % 4) * 5.0
            kind = L if k % 6 == 4 else N
            rows.append((k * 3.0, lo, lo + 12.0, kind))
        rows.append((100.0, -100.0, 100.0, F))
        lines = _lines(*rows)

        clusters = make_clusters(lines)
        counts = Counter(i for c in clusters for i in c.members)
        normal = {i for i, line in enumerate(lines) if line.kind is N}
        assert set(counts) == normal
        assert all(n == 1 for n in counts.values())


# ---------------------------------------------------------------------------
# Experimental merging
# ---------------------------------------------------------------------------


class TestMergeClusters:
    def test_interleaved_clusters_merge(self):
        lines = _lines((0, 0, 10, N), (3, 0, 10, N), (5, 0, 10, N), (8, 0, 10, N))
        first = Cluster(members=[0, 2], bound=Interval(0, 10))
        second = Cluster(members=[1, 3], bound=Interval(0, 10), upper_fixed=12.0)
        (merged,) = merge_clusters(lines, first, second)
        assert sorted(merged.members) == [0, 1, 2, 3]
        assert merged.upper_fixed == 12.0

    def test_stacked_clusters_stay_apart(self):
        lines = _lines((0, 0, 10, N), (5, 0, 10, N))
        first = Cluster(members=[0], bound=Interval(0, 10))
        second = Cluster(members=[1], bound=Interval(0, 10))
        assert merge_clusters(lines, first, second) == [first, second]

    @pytest.mark.parametrize("upper_fixed, expected", [(None, 1), (4.0, 2)])
    def test_merge_localities_respects_fixed_bound(self, upper_fixed, expected):
        lines = _lines((0, 0, 10, N), (3, 0, 10, N), (5, 0, 10, N), (8, 0, 10, N))
        first = Cluster(members=[0, 2], bound=Interval(0, 10), upper_fixed=upper_fixed)
        second = Cluster(members=[1, 3], bound=Interval(0, 10))
        assert len(merge_localities(lines, [first, second])) == expected


# ---------------------------------------------------------------------------
# Reconciliation failures
# ---------------------------------------------------------------------------


class TestClusterErrors:
    def test_seed_lost_below_fixed_line(self):
        # The seed's cluster reaches p=4 through the wide line at p=2. Searching
        # back down stops at the fixed line at p=3, and the lower remainder
        # then stops at the fixed line at p=1, above the seed.
        lines = _lines(
            (0, 0, 10, N),
            (1, 20, 30, F),
            (2, 5, 22, N),
            (3, 40, 50, F),
            (4, 15, 45, N),
        )
        with pytest.raises(LayoutError, match="lost while expanding the lower cluster"):
            make_clusters(lines)

    def test_seed_lost_while_splitting(self, monkeypatch):
        lines = _lines((0, 0, 10, N), (1, 0, 10, N))
        monkeypatch.setattr(
            clusters_module,
            "expand_cluster",
            lambda *args, **kwargs: Cluster(members=[1], bound=Interval(0, 10)),
        )
        with pytest.raises(LayoutError, match="lost while splitting"):
            make_clusters(lines)

    def test_no_progress(self, monkeypatch):
        lines = _lines((0, 0, 10, N))
        monkeypatch.setattr(clusters_module, "_clusters_from_seed", lambda *args: [])
        with pytest.raises(LayoutError, match="made no progress at line 0"):
            make_clusters(lines)
