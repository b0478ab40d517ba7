"""JSON reader/writer for circuit models.

The format is deliberately small, so the CLI and test fixtures can
describe sheets by hand::

    {
      "symbols": {"U1": {"x": 0, "y": 0, "w": 40, "h": 30}},
      "wires": {
        "W1": {
          "output_port": "U1.out",
          "start": [40, 15],
          "orientation": "horizontal",
          "segments": [8, 0, 20, 35, {"length": 12, "mode": "manual"}, 0, 8]
        }
      }
    }

A segment is either a bare length (auto-routed) or an object with
``length`` and optional ``mode``.
"""

from __future__ import annotations

import json
from typing import Any

from wire_beautify.circuit.model import (
    BoundingBox,
    CircuitModel,
    Orientation,
    RoutingMode,
    Segment,
    Wire,
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_segment(wire_id: str, index: int, raw: Any) -> Segment:
    if _is_number(raw):
        return Segment(index=index, length=float(raw))
    if isinstance(raw, dict) and "length" in raw:
        if not _is_number(raw["length"]):
            raise ValueError(
                f"Wire '{wire_id}' segment {index}: 'length' must be a number, "
                f"got {raw['length']!r}"
            )
        mode_name = raw.get("mode", RoutingMode.AUTO.value)
        try:
            mode = RoutingMode(mode_name)
        except ValueError:
            raise ValueError(
                f"Wire '{wire_id}' segment {index}: unknown routing mode "
                f"'{mode_name}' (expected 'auto' or 'manual')"
            ) from None
        return Segment(index=index, length=float(raw["length"]), mode=mode)
    raise ValueError(
        f"Wire '{wire_id}' segment {index}: expected a number or an object "
        f"with a 'length' key, got {raw!r}"
    )


def _parse_wire(wire_id: str, raw: Any) -> Wire:
    if not isinstance(raw, dict):
        raise ValueError(f"Wire '{wire_id}' must be an object")
    try:
        start = raw["start"]
        segments = raw["segments"]
    except KeyError as e:
        raise ValueError(f"Wire '{wire_id}' is missing required key {e}") from None
    if not (isinstance(start, list) and len(start) == 2 and all(map(_is_number, start))):
        raise ValueError(f"Wire '{wire_id}': 'start' must be an [x, y] pair")
    if not isinstance(segments, list):
        raise ValueError(f"Wire '{wire_id}': 'segments' must be a list")
    orientation_name = raw.get("orientation", Orientation.HORIZONTAL.value)
    try:
        orientation = Orientation(orientation_name)
    except ValueError:
        raise ValueError(
            f"Wire '{wire_id}': unknown orientation '{orientation_name}'"
        ) from None
    return Wire(
        id=wire_id,
        output_port=str(raw.get("output_port", wire_id)),
        start=(float(start[0]), float(start[1])),
        initial_orientation=orientation,
        segments=tuple(
            _parse_segment(wire_id, i, seg) for i, seg in enumerate(segments)
        ),
    )


def _parse_symbol(symbol_id: str, raw: Any) -> BoundingBox:
    if not isinstance(raw, dict):
        raise ValueError(f"Symbol '{symbol_id}' must be an object")
    missing = [k for k in ("x", "y", "w", "h") if not _is_number(raw.get(k))]
    if missing:
        raise ValueError(
            f"Symbol '{symbol_id}' needs numeric x, y, w and h "
            f"(bad or missing: {', '.join(missing)})"
        )
    return BoundingBox(
        x=float(raw["x"]), y=float(raw["y"]), w=float(raw["w"]), h=float(raw["h"])
    )


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key, {})
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' must be an object keyed by id")
    return section


def load_model(text: str) -> CircuitModel:
    """Parse a JSON circuit description into a CircuitModel."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from None
    if not isinstance(data, dict):
        raise ValueError("Circuit description must be a JSON object")

    wires = {
        wid: _parse_wire(wid, raw) for wid, raw in _section(data, "wires").items()
    }
    symbols = {
        sid: _parse_symbol(sid, raw) for sid, raw in _section(data, "symbols").items()
    }
    return CircuitModel(wires=wires, symbols=symbols)


def _dump_segment(seg: Segment) -> float | dict[str, Any]:
    if seg.is_manual:
        return {"length": seg.length, "mode": seg.mode.value}
    return seg.length


def dump_model(model: CircuitModel) -> str:
    """Serialise a CircuitModel to JSON text (trailing newline included)."""
    data = {
        "symbols": {
            sid: {"x": box.x, "y": box.y, "w": box.w, "h": box.h}
            for sid, box in model.symbols.items()
        },
        "wires": {
            wid: {
                "output_port": wire.output_port,
                "start": list(wire.start),
                "orientation": wire.initial_orientation.value,
                "segments": [_dump_segment(seg) for seg in wire.segments],
            }
            for wid, wire in model.wires.items()
        },
    }
    return json.dumps(data, indent=2) + "\n"
