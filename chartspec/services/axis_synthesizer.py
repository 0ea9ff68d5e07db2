from __future__ import annotations

from typing import Any, Dict, List

from ..schemas.axis import AxisSpecOptions, Orientation, Position
from ..utils.merge import drop_none
from .axis_labels import (
    get_axis_labels_encoding,
    get_label_angle,
    get_label_anchor_values,
    get_label_format,
    get_label_offset,
    get_tick_count,
    get_time_label_formats,
)
from .constants import SUB_LABEL_TITLE_PADDING
from .scale_resolver import is_vertical_axis

Axis = Dict[str, Any]
Mark = Dict[str, Any]


def _anchor_values(options: AxisSpecOptions) -> Dict[str, Any]:
    return get_label_anchor_values(
        options.position,
        options.label_orientation,
        options.label_align,
        options.vega_label_align,
        options.vega_label_baseline,
    )


def get_default_axis(options: AxisSpecOptions, scale_name: str) -> Axis:
    axis = {
        "scale": scale_name,
        "orient": options.position.value,
        "grid": options.grid,
        "ticks": options.ticks,
        "tickCount": get_tick_count(options.position, options.tick_count_limit, options.grid),
        # only linear scales honor a minimum step
        "tickMinStep": options.tick_min_step if options.scale_type == "linear" else None,
        "title": options.title,
        "labelAngle": get_label_angle(options.label_orientation),
        "labelFontWeight": options.label_font_weight,
        "labelOffset": get_label_offset(options.label_align, scale_name, options.vega_label_offset),
        "labelPadding": options.vega_label_padding,
        "labels": not options.hide_default_labels,
        **_anchor_values(options),
        "encode": {
            "labels": {
                "interactive": options.has_tooltip,
                "update": {"text": get_label_format(options, scale_name)},
            }
        },
    }
    return drop_none(axis)


def get_time_axes(scale_name: str, options: AxisSpecOptions) -> List[Axis]:
    """Split a time axis into a fine-grained secondary axis and, for horizontal axes, a coarse primary axis."""

    return [get_secondary_time_axis(scale_name, options), *get_primary_time_axis(scale_name, options)]


def _time_tick_count(scale_name: str, tick_count: Any) -> Any:
    return tick_count if "Time" in scale_name else None


def get_secondary_time_axis(scale_name: str, options: AxisSpecOptions) -> Axis:
    formats = get_time_label_formats(options.granularity)
    axis = {
        "scale": scale_name,
        "orient": options.position.value,
        "grid": options.grid,
        "ticks": options.ticks,
        "tickCount": _time_tick_count(scale_name, formats["tick_count"]),
        "title": options.title,
        "formatType": "time",
        "labelAngle": get_label_angle(options.label_orientation),
        "labelSeparation": 12,
        **_secondary_time_label_formatting(options),
        **_anchor_values(options),
    }
    return drop_none(axis)


def _secondary_time_label_formatting(options: AxisSpecOptions) -> Dict[str, Any]:
    formats = get_time_label_formats(options.granularity)
    if is_vertical_axis(options.position):
        # one label carries both granularities; the formatter hides repeats of the coarse part
        return {
            "format": f"{formats['primary_label_format']} {formats['secondary_label_format']}",
            "encode": {"labels": {"update": {"text": {"signal": "formatVerticalAxisTimeLabels(datum)"}}}},
        }
    return {"format": formats["secondary_label_format"]}


def get_primary_time_axis(scale_name: str, options: AxisSpecOptions) -> List[Axis]:
    if is_vertical_axis(options.position):
        return []
    formats = get_time_label_formats(options.granularity)
    # sit below the secondary labels, clearing the tick marks when drawn
    dy = (28 if options.ticks else 20) * (-1 if options.position == Position.top else 1)
    axis = {
        "scale": scale_name,
        "orient": options.position.value,
        "format": formats["primary_label_format"],
        "tickCount": _time_tick_count(scale_name, formats["tick_count"]),
        "formatType": "time",
        "labelOverlap": "greedy",
        "labelFontWeight": options.label_font_weight,
        "labelAngle": get_label_angle(options.label_orientation),
        **_anchor_values(options),
        "encode": {
            "labels": {
                "enter": {"dy": {"value": dy}},
                "update": {"text": {"signal": "formatHorizontalTimeAxisLabels(datum)"}},
            }
        },
    }
    return [drop_none(axis)]


def has_sub_labels(options: AxisSpecOptions) -> bool:
    # sub-labels are only supported for horizontal labels
    return bool(options.sub_labels) and options.label_orientation == Orientation.horizontal


def get_sub_label_axis(options: AxisSpecOptions, scale_name: str) -> Axis:
    signal_name = f"{options.name}_subLabels"
    values = [sub_label.value for sub_label in options.sub_labels]

    axis = get_default_axis(options, scale_name)
    axis.update(
        {
            "domain": False,
            "grid": False,
            "labelPadding": 32 if options.ticks else 24,
            "ticks": False,
            "encode": {
                "labels": {
                    "interactive": options.has_tooltip,
                    **get_axis_labels_encoding(
                        options.label_align,
                        options.label_font_weight,
                        "subLabel",
                        options.label_orientation,
                        options.position,
                        signal_name,
                    ),
                }
            },
        }
    )
    axis.pop("title", None)
    axis.pop("domainWidth", None)
    if values:
        axis["values"] = values
    return axis


def apply_sub_label_title_padding(axis: Axis) -> None:
    axis["titlePadding"] = SUB_LABEL_TITLE_PADDING


def set_axis_baseline(axis: Axis, baseline: bool = False) -> Axis:
    # the grammar calls the baseline "domain"
    return {**axis, "domain": baseline, "domainWidth": 2}


def get_baseline_rule(baseline_offset: float, position: Position) -> Mark:
    orientation = "y" if is_vertical_axis(position) else "x"
    position_options = {
        "x": {
            "x": {"value": 0},
            "x2": {"signal": "width"},
            "y": {"scale": "yLinear", "value": baseline_offset},
        },
        "y": {
            "x": {"scale": "xLinear", "value": baseline_offset},
            "y": {"value": 0},
            "y2": {"signal": "height"},
        },
    }
    return {
        "name": f"{orientation}Baseline",
        "description": f"{orientation}Baseline",
        "type": "rule",
        "interactive": False,
        "encode": {"update": position_options[orientation]},
    }
