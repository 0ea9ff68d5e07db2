from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..schemas.axis import Orientation, Position

logger = logging.getLogger(__name__)

Scale = Dict[str, Any]

_RANGE_BY_POSITION: Dict[Position, str] = {
    Position.top: "width",
    Position.bottom: "width",
    Position.left: "height",
    Position.right: "height",
}

_OPPOSING_RANGE_BY_POSITION: Dict[Position, str] = {
    Position.top: "height",
    Position.bottom: "height",
    Position.left: "width",
    Position.right: "width",
}


def get_range(position: Position) -> str:
    return _RANGE_BY_POSITION[Position(position)]


def get_opposing_range(position: Position) -> str:
    return _OPPOSING_RANGE_BY_POSITION[Position(position)]


def is_vertical_axis(position: Position) -> bool:
    return Position(position) in (Position.left, Position.right)


def is_metric_axis(position: Position, chart_orientation: Orientation) -> bool:
    """Vertical charts measure along left/right axes, horizontal charts along top/bottom."""

    if Orientation(chart_orientation) == Orientation.vertical:
        return is_vertical_axis(position)
    return not is_vertical_axis(position)


def _default_scale_name(vertical: bool) -> str:
    return "yLinear" if vertical else "xLinear"


def resolve_scale(scales: List[Scale], position: Position) -> Scale:
    """Return the scale occupying the position's range, creating a linear one if missing.

    The created scale is appended to ``scales``; callers must pass the same list
    for the whole chart build so later axes find it.
    """

    scale_range = get_range(position)
    applicable = [scale for scale in scales if scale.get("range") == scale_range]

    scale: Optional[Scale]
    if len(applicable) > 1:
        scale = next((s for s in scales if "Trellis" in s.get("name", "")), applicable[0])
    else:
        scale = applicable[0] if applicable else None

    if scale is not None:
        return scale

    scale = {
        "name": _default_scale_name(is_vertical_axis(position)),
        "type": "linear",
        "range": scale_range,
    }
    logger.debug("no %s scale for %s axis, created %s", scale_range, Position(position).value, scale["name"])
    scales.append(scale)
    return scale


def resolve_opposing_scale_type(scales: List[Scale], position: Position) -> str:
    opposing_range = get_opposing_range(position)
    for scale in scales:
        if scale.get("range") == opposing_range:
            return scale.get("type", "linear")

    scale = {
        "name": _default_scale_name(not is_vertical_axis(position)),
        "type": "linear",
        "range": opposing_range,
    }
    logger.debug("no opposing %s scale, created %s", opposing_range, scale["name"])
    scales.append(scale)
    return scale["type"]


def get_scale_field(scale: Scale) -> Optional[str]:
    domain = scale.get("domain")
    if isinstance(domain, dict):
        field = domain.get("field")
        if isinstance(field, str):
            return field
    return None


def get_dual_axis_scale_names(base_scale_name: str) -> Dict[str, str]:
    return {
        "primary_scale": f"{base_scale_name}Primary",
        "secondary_scale": f"{base_scale_name}Secondary",
    }
