"""Remove spikes: segments that double back across a zero-length segment."""

from __future__ import annotations

from dataclasses import replace

from wire_beautify.circuit.model import CircuitModel, Segment, Wire
from wire_beautify.layout.diagnostics import DiagnosticSink, TraceEvent, log_sink


def find_spike(segments: tuple[Segment, ...] | list[Segment]) -> int | None:
    """Index *i* of the first spike ``i, i+1 (zero), i+2 (reversed)``."""
    for i in range(len(segments) - 2):
        if (
            segments[i + 1].is_zero
            and segments[i].length * segments[i + 2].length < 0
        ):
            return i
    return None


def remove_wire_spikes(wire: Wire) -> Wire | None:
    """Return *wire* with all spikes collapsed, or None if it had none."""
    segs = list(wire.segments)
    changed = False
    while (i := find_spike(segs)) is not None:
        merged = replace(segs[i], length=segs[i].length + segs[i + 2].length)
        segs[i : i + 3] = [merged]
        changed = True
    if not changed:
        return None
    return wire.with_segments(segs)


def remove_model_spikes(
    model: CircuitModel, sink: DiagnosticSink = log_sink
) -> CircuitModel:
    """Return *model* with spikes removed from every wire."""
    wires = dict(model.wires)
    changed = False
    for wid, wire in model.wires.items():
        despiked = remove_wire_spikes(wire)
        if despiked is not None:
            sink(TraceEvent("spikes", "despiked wire", {
                "wire": wid,
                "segments_before": len(wire.segments),
                "segments_after": len(despiked.segments),
            }))
            wires[wid] = despiked
            changed = True
    return model.with_wires(wires) if changed else model
