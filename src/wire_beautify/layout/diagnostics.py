"""Trace events emitted at pass boundaries and rejected corner candidates.

Layout functions accept a ``sink`` callable. The default forwards events
to this module's logger at DEBUG level; tests pass ``list.append``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceEvent:
    """One diagnostic record."""

    stage: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)


DiagnosticSink = Callable[[TraceEvent], None]


def log_sink(event: TraceEvent) -> None:
    """Default sink: log the event at DEBUG level."""
    if logger.isEnabledFor(logging.DEBUG):
        details = " ".join(f"{k}={v}" for k, v in event.data.items())
        logger.debug("[%s] %s %s", event.stage, event.message, details)


def null_sink(event: TraceEvent) -> None:
    """Discard the event."""
