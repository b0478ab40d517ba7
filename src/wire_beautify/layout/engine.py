"""Layout engine: the complete wire beautify pipeline.

Meant to run at the end of a symbol drag, wire creation or autoroute,
when there is time to look at the whole sheet. Overlapping segments are
spread apart and ordered to minimise crossings, same-net segments are
allowed to overlap, overlapping nub-adjacent segments are nudged, and
finally small corners and spikes are removed.

The pipeline never re-routes wires and never moves symbols.
"""

from __future__ import annotations

from wire_beautify.circuit.model import CircuitModel, Orientation
from wire_beautify.layout.clusters import make_clusters
from wire_beautify.layout.config import DEFAULT_CONFIG, LayoutConfig
from wire_beautify.layout.corners import remove_model_corners
from wire_beautify.layout.diagnostics import DiagnosticSink, TraceEvent, log_sink
from wire_beautify.layout.lines import make_lines
from wire_beautify.layout.nudge import separate_fixed_segments
from wire_beautify.layout.patch import adjust_segments_in_model
from wire_beautify.layout.spikes import remove_model_spikes
from wire_beautify.layout.spreading import calc_seg_positions


def separate_one_orientation(
    orientation: Orientation,
    model: CircuitModel,
    config: LayoutConfig = DEFAULT_CONFIG,
    sink: DiagnosticSink = log_sink,
) -> CircuitModel:
    """Cluster, order and spread all movable segments of one orientation."""
    lines = make_lines(orientation, model, config)
    clusters = make_clusters(lines, config)
    changes = [
        change
        for cluster in clusters
        for change in calc_seg_positions(model.wires, lines, cluster, config)
    ]
    sink(TraceEvent("separate", f"{orientation.value} pass", {
        "lines": len(lines),
        "clusters": len(clusters),
        "moves": len(changes),
    }))
    return adjust_segments_in_model(orientation, model, changes)


def layout(
    wires_to_route: list[str],
    model: CircuitModel,
    config: LayoutConfig = DEFAULT_CONFIG,
    sink: DiagnosticSink = log_sink,
) -> CircuitModel:
    """Separate, order and tidy every wire segment in *model*.

    ``wires_to_route`` is accepted for the caller's bookkeeping only; the
    whole sheet is processed. The input model is never modified, so on a
    ``LayoutError`` the caller still holds the previous model.
    """
    sink(TraceEvent("layout", "start", {
        "wires": len(model.wires),
        "symbols": len(model.symbols),
        "requested": len(wires_to_route),
    }))
    # Separating one orientation can create new overlaps in the other,
    # so both are run more than once.
    for _ in range(config.separation_rounds):
        model = separate_one_orientation(Orientation.VERTICAL, model, config, sink)
        model = separate_one_orientation(Orientation.HORIZONTAL, model, config, sink)

    for orientation in (Orientation.VERTICAL, Orientation.HORIZONTAL):
        model = separate_fixed_segments(orientation, model, config)
    sink(TraceEvent("nudge", "fixed segments separated"))

    model = remove_model_corners(model, config, sink)
    model = remove_model_spikes(model, sink)
    sink(TraceEvent("layout", "done"))
    return model
