"""Wire segment separation, ordering and cleanup.

Public API:
- layout: Full beautify pipeline (circuit model in, circuit model out)
- separate_one_orientation: One cluster/order/spread pass
- LayoutConfig: Injectable geometry configuration
- LayoutError: Raised when a structural invariant is broken
"""

from wire_beautify.layout.common import LayoutError
from wire_beautify.layout.config import LayoutConfig
from wire_beautify.layout.engine import layout, separate_one_orientation

__all__ = [
    "LayoutConfig",
    "LayoutError",
    "layout",
    "separate_one_orientation",
]
