from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..schemas.axis import ColorScheme, Orientation


@dataclass
class BuildContext:
    """Mutable state shared by every axis compiled in one chart build.

    Create a fresh instance per chart build. ``metric_axis_count`` makes the
    result depend on the order axes are compiled in, so axes must be compiled
    sequentially in the caller's declared order. It stays ``None`` until a
    dual-metric axis is compiled.
    """

    chart_orientation: Orientation = Orientation.vertical
    color_scheme: ColorScheme = ColorScheme.light
    metric_axis_count: Optional[int] = None

    def to_usermeta(self) -> Dict[str, Any]:
        if self.metric_axis_count is None:
            return {}
        return {"metricAxisCount": self.metric_axis_count}
