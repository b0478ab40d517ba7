"""Circuit model consumed and produced by the layout engine."""

from wire_beautify.circuit.loader import dump_model, load_model
from wire_beautify.circuit.model import (
    BoundingBox,
    CircuitModel,
    Orientation,
    RoutingMode,
    Segment,
    Wire,
)

__all__ = [
    "BoundingBox",
    "CircuitModel",
    "Orientation",
    "RoutingMode",
    "Segment",
    "Wire",
    "dump_model",
    "load_model",
]
