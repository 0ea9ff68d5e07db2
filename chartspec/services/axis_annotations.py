from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..schemas.axis import AnnotationFormat, AxisAnnotationDetail, AxisSpecOptions, ColorScheme, Position
from .constants import (
    ANNOTATION_RANGED_ICON_SVG,
    ANNOTATION_SINGLE_ICON_SVG,
    DEFAULT_AXIS_ANNOTATION_COLOR,
    DEFAULT_AXIS_ANNOTATION_DATA_KEY,
    DEFAULT_AXIS_ANNOTATION_OFFSET,
    FILTERED_TABLE,
    get_color_value,
)

Axis = Dict[str, Any]
Data = Dict[str, Any]
Mark = Dict[str, Any]
Signal = Dict[str, Any]


@dataclass(frozen=True)
class AxisAnnotationSpec:
    name: str
    axis_name: str
    format: AnnotationFormat
    offset: float
    color: str
    color_scheme: ColorScheme
    data_key: str
    options: List[AxisAnnotationDetail]
    has_popover: bool


def axis_supports_annotations(position: Optional[Position]) -> bool:
    return position == Position.bottom


def get_axis_annotations(options: AxisSpecOptions) -> List[AxisAnnotationSpec]:
    """Apply annotation defaults; only bottom axes carry annotations."""

    if not axis_supports_annotations(options.position):
        return []
    default_format = AnnotationFormat.span if options.scale_type == "time" else AnnotationFormat.summary
    return [
        AxisAnnotationSpec(
            name=annotation.name or f"{options.name}Annotation{index}",
            axis_name=options.name,
            format=annotation.format or default_format,
            offset=annotation.offset if annotation.offset is not None else DEFAULT_AXIS_ANNOTATION_OFFSET,
            color=annotation.color or DEFAULT_AXIS_ANNOTATION_COLOR,
            color_scheme=options.color_scheme,
            data_key=annotation.data_key or DEFAULT_AXIS_ANNOTATION_DATA_KEY,
            options=list(annotation.options),
            has_popover=annotation.has_popover,
        )
        for index, annotation in enumerate(options.axis_annotations)
    ]


# data


def add_axis_annotation_data(data: List[Data], annotation: AxisAnnotationSpec) -> None:
    data.append(_details_data(annotation))
    if annotation.format == AnnotationFormat.summary:
        data.append(_summary_data(annotation))
    else:
        data.extend([_aggregate_data(annotation), _range_data(annotation.name)])


def _details_data(annotation: AxisAnnotationSpec) -> Data:
    values = [
        {"id": detail.id, "color": get_color_value(detail.color, annotation.color_scheme) if detail.color else None}
        for detail in annotation.options
    ]
    return {"name": f"{annotation.name}_details", "values": values}


def _color_lookup_transforms(annotation: AxisAnnotationSpec) -> List[Dict[str, Any]]:
    fallback = get_color_value(annotation.color, annotation.color_scheme)
    return [
        {"type": "formula", "expr": f"datum.annotations[0].{annotation.name}_id", "as": "id"},
        {
            "type": "lookup",
            "from": f"{annotation.name}_details",
            "key": "id",
            "values": ["color"],
            "fields": ["id"],
        },
        {
            "type": "formula",
            "expr": f"datum.number > 1 || datum.color == null ? '{fallback}' : datum.color",
            "as": "color",
        },
    ]


def _flatten_transforms(annotation: AxisAnnotationSpec) -> List[Dict[str, Any]]:
    return [
        {"type": "filter", "expr": f"datum.{annotation.data_key}"},
        {"type": "flatten", "fields": [annotation.data_key], "as": [f"{annotation.name}_id"]},
    ]


def _aggregate_data(annotation: AxisAnnotationSpec) -> Data:
    key = annotation.data_key
    return {
        "name": f"{annotation.name}_aggregate",
        "source": FILTERED_TABLE,
        "transform": [
            *_flatten_transforms(annotation),
            {
                "type": "aggregate",
                "groupby": [f"{annotation.name}_id"],
                "fields": ["datetime", "datetime"],
                "ops": ["min", "max"],
            },
            {"type": "formula", "expr": "datum.max_datetime - datum.min_datetime", "as": "width"},
            {"type": "formula", "expr": "datum.width / 2 + datum.min_datetime", "as": "center"},
            {
                "type": "aggregate",
                "groupby": ["center"],
                "fields": ["min_datetime", "max_datetime", "width", key, key],
                "ops": ["min", "max", "max", "count", "values"],
                "as": ["lower", "upper", "width", "number", "annotations"],
            },
            *_color_lookup_transforms(annotation),
        ],
    }


def _summary_data(annotation: AxisAnnotationSpec) -> Data:
    key = annotation.data_key
    return {
        "name": f"{annotation.name}_summary",
        "source": FILTERED_TABLE,
        "transform": [
            *_flatten_transforms(annotation),
            {"type": "aggregate", "groupby": [f"{annotation.name}_id"]},
            {
                "type": "aggregate",
                "groupby": ["center"],
                "fields": [key, key],
                "ops": ["count", "values"],
                "as": ["number", "annotations"],
            },
            *_color_lookup_transforms(annotation),
        ],
    }


def _range_data(name: str) -> Data:
    return {
        "name": f"{name}_range",
        "source": f"{name}_aggregate",
        "transform": [
            {
                "type": "filter",
                "expr": f"{name}_highlighted && datum.center == {name}_highlighted.center && {name}_highlighted.width > 0",
            }
        ],
    }


# signals


def add_axis_annotation_signals(signals: List[Signal], annotation: AxisAnnotationSpec) -> None:
    """Span annotations get a hover/click/select triple; hovering falls back to the last click on mouse-out."""

    if annotation.format != AnnotationFormat.span:
        return
    name = annotation.name
    signals.extend(
        [
            {
                "name": f"{name}_highlighted",
                "value": None,
                "on": [
                    {"events": f"@{name}_icon:mouseover", "update": "datum"},
                    {"events": f"@{name}_icon:mouseout", "update": f"{name}_clicked"},
                ],
            },
            {
                "name": f"{name}_clicked",
                "value": {},
                "on": [
                    {
                        "events": {
                            "markname": f"{name}_icon",
                            "type": "mousedown",
                            "between": [{"type": "mousedown"}, {"type": "mouseup"}],
                        },
                        "update": "datum",
                    },
                    {"events": "window:mouseup", "update": "{}"},
                ],
            },
            {"name": f"{name}_selected", "update": f"{name}_clicked.center"},
        ]
    )


# marks


def _cursor(annotation: AxisAnnotationSpec) -> Optional[Dict[str, str]]:
    return {"value": "pointer"} if annotation.has_popover else None


def _icon_enter(annotation: AxisAnnotationSpec) -> Dict[str, Any]:
    # a transparent 2px border widens the hover target
    enter: Dict[str, Any] = {"stroke": {"value": "transparent"}, "strokeWidth": {"value": 2}}
    cursor = _cursor(annotation)
    if cursor:
        enter["cursor"] = cursor
    return enter


def add_axis_annotation_marks(marks: List[Mark], annotation: AxisAnnotationSpec, scale_name: str) -> None:
    if annotation.format == AnnotationFormat.summary:
        marks.append(get_axis_annotation_summary_marks(annotation))
    else:
        marks.append(get_axis_annotation_span_marks(annotation, scale_name))


def get_axis_annotation_summary_marks(annotation: AxisAnnotationSpec) -> Mark:
    name = annotation.name
    return {
        "name": f"{name}_group",
        "type": "group",
        "from": {"data": f"{name}_summary"},
        "marks": [
            {
                "name": f"{name}_icon",
                "type": "path",
                "from": {"data": f"{name}_summary"},
                "zindex": 2,
                "encode": {
                    "enter": _icon_enter(annotation),
                    "update": {
                        "path": {"signal": f"'{ANNOTATION_SINGLE_ICON_SVG}'"},
                        "fill": {"field": "color"},
                        "xc": {"signal": "width - 12"},
                        "yc": {"signal": f"height + {annotation.offset}"},
                    },
                },
            }
        ],
    }


def _range_rect(annotation: AxisAnnotationSpec, update: Dict[str, Any]) -> Mark:
    return {
        "type": "rect",
        "from": {"data": f"{annotation.name}_range"},
        "encode": {
            "update": {
                **update,
                "fill": {"field": "color"},
                "fillOpacity": {"signal": f"{annotation.name}_selected ? 1.0 : 0.2"},
            }
        },
    }


def get_axis_annotation_span_marks(annotation: AxisAnnotationSpec, scale_name: str) -> Mark:
    name = annotation.name
    offset = annotation.offset
    lower = {"scale": scale_name, "field": "lower", "band": 0.5}
    upper = {"scale": scale_name, "field": "upper", "band": 0.5}
    return {
        "name": f"{name}_group",
        "type": "group",
        "marks": [
            {
                "name": f"{name}_range",
                "type": "group",
                "marks": [
                    _range_rect(
                        annotation,
                        {"x": lower, "y": {"signal": f"height + {offset}"}, "width": {"value": 2}, "height": {"value": -4}},
                    ),
                    _range_rect(
                        annotation,
                        {"x": lower, "y": {"signal": f"height + {offset}"}, "x2": upper, "height": {"value": 2}},
                    ),
                    _range_rect(
                        annotation,
                        {"x": upper, "y": {"signal": f"height + {offset} + 2"}, "width": {"value": 2}, "height": {"value": -6}},
                    ),
                ],
            },
            {
                "name": f"{name}_icon",
                "type": "path",
                "from": {"data": f"{name}_aggregate"},
                "encode": {
                    "enter": _icon_enter(annotation),
                    "update": {
                        "path": {
                            "signal": (
                                f"datum.width > 0 ? '{ANNOTATION_RANGED_ICON_SVG}' : '{ANNOTATION_SINGLE_ICON_SVG}'"
                            )
                        },
                        "fill": {"field": "color"},
                        "xc": {"scale": scale_name, "field": "center", "band": 0.5},
                        "yc": {"signal": f"height + {offset}"},
                        "fillOpacity": {"signal": f"({name}_selected && {name}_selected != datum.center) ? 0.0 : 1.0"},
                    },
                },
            },
        ],
    }


# axes


def add_axis_annotation_axis(axes: List[Axis], annotation: AxisAnnotationSpec, scale_name: str) -> None:
    """Append an empty axis whose only job is to reserve layout space below the plot."""

    axes.append({"scale": scale_name, "orient": "bottom", "values": [], "offset": annotation.offset})
