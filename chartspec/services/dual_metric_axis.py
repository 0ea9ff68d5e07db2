from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..schemas.axis import ColorScheme, Position
from ..utils.merge import deep_merge
from .constants import (
    COLOR_SCALE,
    DEFAULT_FONT_COLOR,
    FADE_FACTOR,
    FIRST_RSC_SERIES_ID,
    LAST_RSC_SERIES_ID,
    MOUSE_OVER_SERIES,
    get_color_value,
)
from .context import BuildContext
from .scale_resolver import get_dual_axis_scale_names, is_metric_axis

logger = logging.getLogger(__name__)

Axis = Dict[str, Any]


def _merge_encode(axis: Axis, encodings: Dict[str, Any]) -> None:
    axis["encode"] = deep_merge(axis["encode"], encodings) if axis.get("encode") else encodings


def apply_primary_metric_axis_encodings(axis: Axis, color_scheme: ColorScheme = ColorScheme.light) -> None:
    """Color the axis like its series when only one series is drawn; fade while the other series is hovered."""

    fill_rules: List[Dict[str, Any]] = [
        {
            "test": f"length(domain('{COLOR_SCALE}')) -1 === 1",
            "signal": f"scale('{COLOR_SCALE}', {FIRST_RSC_SERIES_ID})",
        },
        {"value": get_color_value(DEFAULT_FONT_COLOR, color_scheme)},
    ]
    fill_opacity_rules = [{"test": f"{MOUSE_OVER_SERIES} === {LAST_RSC_SERIES_ID}", "value": FADE_FACTOR}]
    _merge_encode(
        axis,
        {
            "labels": {"update": {"fill": fill_rules, "fillOpacity": fill_opacity_rules}},
            "title": {"update": {"fill": fill_rules, "fillOpacity": fill_opacity_rules}},
        },
    )


def apply_secondary_metric_axis_encodings(axis: Axis) -> None:
    fill_rules = [{"signal": f"scale('{COLOR_SCALE}', {LAST_RSC_SERIES_ID})"}]
    fill_opacity_rules = [
        {
            "test": f"isValid({MOUSE_OVER_SERIES}) && {MOUSE_OVER_SERIES} !== {LAST_RSC_SERIES_ID}",
            "value": FADE_FACTOR,
        }
    ]
    _merge_encode(
        axis,
        {
            "labels": {"enter": {"fill": fill_rules}, "update": {"fillOpacity": fill_opacity_rules}},
            "title": {"enter": {"fill": fill_rules}, "update": {"fillOpacity": fill_opacity_rules}},
        },
    )


def add_dual_metric_axis_config(
    axis: Axis, is_primary: bool, scale_name: str, color_scheme: ColorScheme = ColorScheme.light
) -> None:
    names = get_dual_axis_scale_names(scale_name)
    if is_primary:
        axis["scale"] = names["primary_scale"]
        apply_primary_metric_axis_encodings(axis, color_scheme)
    else:
        axis["scale"] = names["secondary_scale"]
        apply_secondary_metric_axis_encodings(axis)


def handle_dual_metric_axis_config(
    *,
    dual_metric_axis: bool,
    axis: Axis,
    context: BuildContext,
    scale_name: str,
    position: Position,
    increment_metric_axis_count: bool,
) -> None:
    """Mark ``axis`` primary or secondary based on how many metric axes were compiled before it.

    The designation depends only on call order within ``context``. A base axis
    and its sub-label companion share one slot: only the base call increments.
    """

    if not dual_metric_axis or not is_metric_axis(position, context.chart_orientation):
        return
    if context.metric_axis_count is None:
        context.metric_axis_count = 0
    is_primary = context.metric_axis_count == 0
    add_dual_metric_axis_config(axis, is_primary, scale_name, context.color_scheme)
    logger.debug(
        "%s axis on %s is the %s metric axis",
        Position(position).value,
        scale_name,
        "primary" if is_primary else "secondary",
    )
    if increment_metric_axis_count:
        context.metric_axis_count += 1
