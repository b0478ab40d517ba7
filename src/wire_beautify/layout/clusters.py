"""Segment clustering: group adjacent, overlapping movable Lines.

Scanning the ``p``-sorted Line array, each cluster grows from the lowest
ungrouped normal Line until it meets a fixed Line (which becomes the
cluster's fixed boundary on that side) or a gap larger than the spacing
the cluster would need. Different clusters may share ``p`` values if
their bounds do not overlap. Every normal Line ends up in exactly one
cluster.
"""

from __future__ import annotations

from dataclasses import replace

from wire_beautify.layout.common import Cluster, LayoutError, Line, LineKind
from wire_beautify.layout.config import DEFAULT_CONFIG, LayoutConfig


def expand_cluster(
    lines: list[Line],
    index: int,
    config: LayoutConfig = DEFAULT_CONFIG,
    downwards_from: Cluster | None = None,
) -> Cluster:
    """Grow a cluster from ``lines[index]``.

    With ``downwards_from`` unset the search walks upwards (increasing
    index) from a fresh single-member cluster. Otherwise it walks
    downwards, keeping the bound and fixed boundaries of
    ``downwards_from`` but restarting membership at *index*; lines below
    the lowest member of ``downwards_from`` are only checked for a fixed
    boundary, never absorbed.
    """
    upwards = downwards_from is None
    step = 1 if upwards else -1
    search_start = lines[index].p

    if downwards_from is None:
        cluster = Cluster(members=[index], bound=lines[index].bound)
        lowest = None
    else:
        cluster = replace(downwards_from, members=[index])
        lowest = min(downwards_from.members)

    i = index + step
    while 0 <= i < len(lines):
        line = lines[i]
        gap_limit = (
            config.max_segment_separation * (len(cluster.members) + 1)
            + config.small_offset
        )
        if abs(line.p - search_start) > gap_limit:
            break
        if line.bound.overlaps(cluster.bound):
            if line.kind.is_fixed:
                if upwards:
                    cluster.upper_fixed = line.p
                else:
                    cluster.lower_fixed = line.p
                break
            if line.kind is LineKind.NORMAL and (lowest is None or i >= lowest):
                cluster.members.append(i)
                cluster.bound = cluster.bound.union(line.bound)
        i += step
    return cluster


def _clusters_from_seed(
    lines: list[Line], seed: int, config: LayoutConfig
) -> list[Cluster]:
    """One or two clusters, one of which contains *seed*."""
    found = expand_cluster(lines, seed, config)
    # Search back down with the enlarged bound: this can pick up lines the
    # narrow upward search missed, and finds a lower fixed boundary.
    down = expand_cluster(lines, max(found.members), config, downwards_from=found)
    if seed in down.members:
        return [down]

    # The downward search stopped above the seed, so the lines below the
    # stopping point form a separate cluster under the first one.
    rest = [i for i in found.members if i not in down.members]
    if seed not in rest:
        raise LayoutError(f"Cluster seed line {seed} lost while splitting a cluster")
    remainder = replace(found, members=rest, upper_fixed=down.lower_fixed)
    remainder = expand_cluster(lines, max(rest), config, downwards_from=remainder)
    if seed not in remainder.members:
        raise LayoutError(
            f"Cluster seed line {seed} lost while expanding the lower cluster"
        )
    return [down, remainder]


def make_clusters(
    lines: list[Line], config: LayoutConfig = DEFAULT_CONFIG
) -> list[Cluster]:
    """Partition the normal Lines of a sorted Line array into clusters."""
    groupable = [line.kind is LineKind.NORMAL for line in lines]
    clusters: list[Cluster] = []

    while (seed := next((i for i, g in enumerate(groupable) if g), None)) is not None:
        for cluster in _clusters_from_seed(lines, seed, config):
            members = [i for i in dict.fromkeys(cluster.members) if groupable[i]]
            if not members:
                continue
            for i in members:
                groupable[i] = False
            cluster.members = members
            clusters.append(cluster)
        if groupable[seed]:
            raise LayoutError(f"Clustering made no progress at line {seed}")

    return clusters


# ---------------------------------------------------------------------------
# Cluster merging (experimental, not used by the layout pipeline)
# ---------------------------------------------------------------------------


def merge_clusters(
    lines: list[Line], first: Cluster, second: Cluster
) -> list[Cluster]:
    """Merge *second* into *first* when their lines interleave and overlap."""
    first_top = max(lines[i].p for i in first.members)
    second_bottom = min(lines[i].p for i in second.members)
    if first_top < second_bottom or not first.bound.overlaps(second.bound):
        return [first, second]
    return [
        replace(
            first,
            members=first.members + second.members,
            bound=first.bound.union(second.bound),
            upper_fixed=second.upper_fixed,
        )
    ]


def merge_localities(lines: list[Line], clusters: list[Cluster]) -> list[Cluster]:
    """Merge consecutive clusters where possible.

    A cluster with an upper fixed boundary never absorbs its successor.
    """
    merged: list[Cluster] = []
    for cluster in clusters:
        if not merged or merged[-1].upper_fixed is not None:
            merged.append(cluster)
        else:
            merged[-1:] = merge_clusters(lines, merged[-1], cluster)
    return merged
