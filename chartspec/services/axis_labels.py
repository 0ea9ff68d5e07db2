from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union

from ..schemas.axis import AxisSpecOptions, Granularity, Label, LabelAlign, LabelFormat, Orientation, Position
from .scale_resolver import is_vertical_axis

Rule = Dict[str, Any]

_RAW_VALUE: Rule = {"signal": "datum.value"}

_TIME_LABEL_FORMATS: Dict[Granularity, Tuple[str, str, Any]] = {
    Granularity.minute: ("%-I:%M %p", "%b %-d", "minute"),
    Granularity.hour: ("%-I %p", "%b %-d", "hour"),
    Granularity.day: ("%-d", "%b", "day"),
    Granularity.week: ("%-d", "%b", "week"),
    Granularity.month: ("%b", "%Y", "month"),
    Granularity.quarter: ("Q%q", "%Y", {"interval": "month", "step": 3}),
    Granularity.year: ("%Y", "%Y", "year"),
}

_PARALLEL_ALIGN = {LabelAlign.start: "left", LabelAlign.center: "center", LabelAlign.end: "right"}
_PERPENDICULAR_BASELINE = {LabelAlign.start: "top", LabelAlign.center: "middle", LabelAlign.end: "bottom"}

_D3_NUMBER_FORMATS = {
    "currency": "$,.2f",
    "standardNumber": ",",
}


def get_time_label_formats(granularity: Granularity) -> Dict[str, Any]:
    """Return the (secondary, primary, tick interval) formats for a time granularity."""

    secondary, primary, tick_count = _TIME_LABEL_FORMATS.get(
        Granularity(granularity), _TIME_LABEL_FORMATS[Granularity.day]
    )
    return {
        "secondary_label_format": secondary,
        "primary_label_format": primary,
        "tick_count": tick_count,
    }


def get_tick_count(position: Position, tick_count_limit: Optional[int] = None, grid: bool = False) -> Optional[Rule]:
    """Suggest one tick per 100px, clamped; the renderer treats it as a hint."""

    dimension = "height" if is_vertical_axis(position) else "width"
    # 0 is a valid limit
    if tick_count_limit is not None:
        return {"signal": f"clamp(ceil({dimension}/100), 2, {tick_count_limit})"}
    if grid:
        return {"signal": f"clamp(ceil({dimension}/100), 2, 10)"}
    return None


def get_label_value(label: Union[Label, str, float, int]) -> Union[str, float, int]:
    if isinstance(label, Label):
        return label.value
    return label


def label_is_parallel_to_axis(position: Position, label_orientation: Orientation) -> bool:
    axis_orientation = Orientation.vertical if is_vertical_axis(position) else Orientation.horizontal
    return axis_orientation == Orientation(label_orientation)


def get_label_angle(label_orientation: Orientation) -> int:
    if Orientation(label_orientation) == Orientation.horizontal:
        return 0
    # vertical labels read bottom to top
    return 270


def get_label_anchor(position: Position, label_orientation: Orientation, label_align: LabelAlign) -> Dict[str, str]:
    position = Position(position)
    label_align = LabelAlign(label_align)
    if label_is_parallel_to_axis(position, label_orientation):
        align = _PARALLEL_ALIGN[label_align]
        baseline = "bottom" if position in (Position.top, Position.left) else "top"
    else:
        baseline = _PERPENDICULAR_BASELINE[label_align]
        align = "right" if position in (Position.bottom, Position.left) else "left"
    return {"align": align, "baseline": baseline}


def get_controlled_label_anchor_values(
    position: Position, label_orientation: Orientation, label_align: Optional[LabelAlign]
) -> Dict[str, Optional[str]]:
    if not label_align:
        return {"align": None, "baseline": None}
    return get_label_anchor(position, label_orientation, label_align)


def get_label_anchor_values(
    position: Position,
    label_orientation: Orientation,
    label_align: Optional[LabelAlign],
    vega_label_align: Optional[str] = None,
    vega_label_baseline: Optional[str] = None,
) -> Dict[str, Optional[str]]:
    anchor = get_controlled_label_anchor_values(position, label_orientation, label_align)
    return {
        "labelAlign": vega_label_align or anchor["align"],
        "labelBaseline": vega_label_baseline or anchor["baseline"],
    }


def get_label_offset(
    label_align: Optional[LabelAlign], scale_name: str, vega_label_offset: Any = None
) -> Optional[Any]:
    if vega_label_offset is not None:
        return vega_label_offset
    if label_align == LabelAlign.start:
        return {"signal": f"bandwidth('{scale_name}') / -2"}
    if label_align == LabelAlign.end:
        return {"signal": f"bandwidth('{scale_name}') / 2"}
    return None


def get_label_number_format(number_format: str) -> List[Rule]:
    if number_format == "shortNumber":
        return [{"test": "isNumber(datum['value'])", "signal": "formatShortNumber(datum['value'])"}]
    if number_format == "shortCurrency":
        return [{"test": "isNumber(datum['value'])", "signal": "formatShortCurrency(datum['value'])"}]
    specifier = _D3_NUMBER_FORMATS.get(number_format, number_format)
    return [{"test": "isNumber(datum.value)", "signal": f"format(datum.value, '{specifier}')"}]


def get_label_format(options: AxisSpecOptions, scale_name: str) -> Union[Rule, List[Rule]]:
    """Ordered text rules for the axis labels; the first passing test wins."""

    if options.label_format == LabelFormat.percentage:
        return [{"test": "isNumber(datum.value)", "signal": "format(datum.value, '~%')"}, dict(_RAW_VALUE)]
    if options.label_format == LabelFormat.duration:
        return {"signal": "formatTimeDurationLabels(datum)"}

    fallback = dict(_RAW_VALUE)
    if (
        options.truncate_labels
        and "Band" in scale_name
        and label_is_parallel_to_axis(options.position, options.label_orientation)
    ):
        fallback = {
            "signal": f"truncateText(datum.value, bandwidth('{scale_name}')/(1- paddingInner), 'normal', 14)"
        }
    return [*get_label_number_format(options.number_format), fallback]


def _lookup(signal_name: str) -> str:
    return f"indexof(pluck({signal_name}, 'value'), datum.value)"


def get_encoded_label_anchor(
    position: Position, signal_name: str, label_orientation: Orientation, default_label_align: LabelAlign
) -> Dict[str, List[Rule]]:
    found = f"{_lookup(signal_name)} !== -1 && {signal_name}[{_lookup(signal_name)}]"
    entry = f"{signal_name}[{_lookup(signal_name)}]"
    anchor = get_label_anchor(position, label_orientation, default_label_align)
    return {
        "align": [{"test": f"{found}.align", "signal": f"{entry}.align"}, {"value": anchor["align"]}],
        "baseline": [{"test": f"{found}.baseline", "signal": f"{entry}.baseline"}, {"value": anchor["baseline"]}],
    }


def get_axis_labels_encoding(
    label_align: Optional[LabelAlign],
    label_font_weight: str,
    label_key: str,
    label_orientation: Orientation,
    position: Position,
    signal_name: str,
) -> Dict[str, Any]:
    """Label encoding that reads per-value text/weight/anchor overrides from a signal."""

    index = _lookup(signal_name)
    entry = f"{signal_name}[{index}]"
    update: Dict[str, Any] = {
        "text": [
            {"test": f"{index} !== -1 && {entry}.{label_key}", "signal": f"{entry}.{label_key}"},
            dict(_RAW_VALUE),
        ],
        "fontWeight": [
            {"test": f"{index} !== -1 && {entry}.fontWeight", "signal": f"{entry}.fontWeight"},
            {"value": label_font_weight},
        ],
    }
    update.update(
        get_encoded_label_anchor(position, signal_name, label_orientation, label_align or LabelAlign.center)
    )
    return {"update": update}
