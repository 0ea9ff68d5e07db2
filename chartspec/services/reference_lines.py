from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..schemas.axis import AxisSpecOptions, ColorScheme, Position, ReferenceLineLayer, ReferenceLinePosition
from .constants import (
    DEFAULT_FONT_COLOR,
    DEFAULT_LABEL_FONT_WEIGHT,
    DEFAULT_REFERENCE_LINE_COLOR,
    REFERENCE_LINE_LABEL_CLEARANCE,
    get_color_value,
    get_path_from_icon,
    get_stroke_dash_from_line_type,
)
from .scale_resolver import is_vertical_axis

Axis = Dict[str, Any]
Mark = Dict[str, Any]

_SUPPORTED_SCALE_TYPES = {"linear", "time", "utc"}

# icon distance from the edge of the plot area
_ICON_OFFSET = 24
_ICON_SIZE = 324
_LABEL_OFFSET = 28
_LABEL_OFFSET_WITH_ICON = 50
# label shift along a left/right axis, away from the line
_LABEL_SIDE_OFFSET = 4


@dataclass(frozen=True)
class ReferenceLineSpec:
    """A reference line with defaults applied and a stable mark name."""

    name: str
    value: Any
    color: str
    color_scheme: ColorScheme
    icon: Optional[str]
    icon_color: str
    label: Optional[str]
    label_color: str
    label_font_weight: str
    layer: ReferenceLineLayer
    position: ReferenceLinePosition
    stroke_dash: List[float]


def scale_type_supports_reference_lines(scale_type: Optional[str]) -> bool:
    return scale_type in _SUPPORTED_SCALE_TYPES


def get_reference_lines(options: AxisSpecOptions) -> List[ReferenceLineSpec]:
    return [
        ReferenceLineSpec(
            name=f"{options.name}ReferenceLine{index}",
            value=line.value,
            color=line.color or DEFAULT_REFERENCE_LINE_COLOR,
            color_scheme=options.color_scheme,
            icon=line.icon,
            icon_color=line.icon_color or DEFAULT_FONT_COLOR,
            label=line.label,
            label_color=line.label_color or DEFAULT_FONT_COLOR,
            label_font_weight=line.label_font_weight or DEFAULT_LABEL_FONT_WEIGHT,
            layer=line.layer,
            position=line.position,
            stroke_dash=get_stroke_dash_from_line_type(line.line_type),
        )
        for index, line in enumerate(options.reference_lines)
    ]


def _signal_literal(value: Any) -> str:
    return f"'{value}'" if isinstance(value, str) else f"{value}"


def hide_labels_under_reference_lines(axis: Axis, options: AxisSpecOptions, scale_name: str) -> None:
    """Blank axis labels closer than the clearance to a centered reference line icon or label.

    The tests for all qualifying lines are prepended as one block, in
    declaration order, ahead of the format rules.
    """

    text = axis.get("encode", {}).get("labels", {}).get("update", {}).get("text")
    if not isinstance(text, list):
        return
    tests = [
        {
            "test": (
                f"abs(scale('{scale_name}', {_signal_literal(line.value)}) - "
                f"scale('{scale_name}', datum.value)) < {REFERENCE_LINE_LABEL_CLEARANCE}"
            ),
            "value": "",
        }
        for line in get_reference_lines(options)
        if (line.icon or line.label) and line.position == ReferenceLinePosition.center
    ]
    text[0:0] = tests


def get_reference_line_marks(options: AxisSpecOptions, scale_name: str) -> Dict[str, List[Mark]]:
    marks: Dict[str, List[Mark]] = {"back": [], "front": []}
    for line in get_reference_lines(options):
        position_encoding = {"scale": scale_name, "value": line.value}
        marks[line.layer.value].extend(
            [
                get_reference_line_rule_mark(options, line, position_encoding),
                *get_reference_line_symbol_mark(options, line, position_encoding),
                *get_reference_line_text_mark(options, line, position_encoding),
            ]
        )
    return marks


def get_reference_line_rule_mark(
    options: AxisSpecOptions, line: ReferenceLineSpec, position_encoding: Dict[str, Any]
) -> Mark:
    start_offset = 9 if options.ticks else 0
    position_options: Dict[Position, Dict[str, Any]] = {
        Position.top: {
            "x": position_encoding,
            "y": {"value": -start_offset},
            "y2": {"signal": "height"},
        },
        Position.bottom: {
            "x": position_encoding,
            "y": {"value": 0},
            "y2": {"signal": f"height + {start_offset}"},
        },
        Position.left: {
            "x": {"value": -start_offset},
            "x2": {"signal": "width"},
            "y": position_encoding,
        },
        Position.right: {
            "x": {"value": 0},
            "x2": {"signal": f"width + {start_offset}"},
            "y": position_encoding,
        },
    }
    return {
        "name": line.name,
        "type": "rule",
        "interactive": False,
        "encode": {
            "enter": {
                "stroke": {"value": get_color_value(line.color, line.color_scheme)},
                "strokeDash": {"value": list(line.stroke_dash)},
            },
            "update": position_options[options.position],
        },
    }


def _additive_position_options(
    offset: int, position_encoding: Dict[str, Any], horizontal_offset: Optional[int] = None
) -> Dict[Position, Dict[str, Any]]:
    side_encoding = dict(position_encoding)
    if horizontal_offset is not None:
        side_encoding["offset"] = horizontal_offset
    return {
        Position.top: {"x": position_encoding, "y": {"value": -offset}},
        Position.bottom: {"x": position_encoding, "y": {"signal": f"height + {offset}"}},
        Position.left: {"x": {"value": -offset}, "y": side_encoding},
        Position.right: {"x": {"signal": f"width + {offset}"}, "y": side_encoding},
    }


def get_reference_line_symbol_mark(
    options: AxisSpecOptions, line: ReferenceLineSpec, position_encoding: Dict[str, Any]
) -> List[Mark]:
    if not line.icon:
        return []
    position_options = _additive_position_options(_ICON_OFFSET, position_encoding)
    return [
        {
            "name": f"{line.name}_symbol",
            "type": "symbol",
            "encode": {
                "enter": {
                    "shape": {"value": get_path_from_icon(line.icon)},
                    "size": {"value": _ICON_SIZE},
                    "fill": {"value": get_color_value(line.icon_color, line.color_scheme)},
                },
                "update": position_options[options.position],
            },
        }
    ]


def get_reference_line_text_mark(
    options: AxisSpecOptions, line: ReferenceLineSpec, position_encoding: Dict[str, Any]
) -> List[Mark]:
    if not line.label:
        return []
    # keep the label outside the icon when both are drawn
    vertical_offset = _LABEL_OFFSET_WITH_ICON if line.icon else _LABEL_OFFSET
    position_options = _additive_position_options(vertical_offset, position_encoding, _LABEL_SIDE_OFFSET)
    update: Dict[str, Any] = {
        "text": [{"value": line.label}],
        "fontWeight": [{"value": line.label_font_weight}],
        "fill": {"value": get_color_value(line.label_color, line.color_scheme)},
    }
    if is_vertical_axis(options.position):
        update["baseline"] = {"value": "middle"}
    else:
        update["align"] = {"value": "center"}
    update.update(position_options[options.position])
    return [{"name": f"{line.name}_label", "type": "text", "encode": {"update": update}}]
