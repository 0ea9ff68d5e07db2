from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..schemas.axis import AxisSpecOptions, Position
from .constants import DEFAULT_THUMBNAIL_URL_KEY, FILTERED_TABLE, MAX_THUMBNAIL_SIZE, MIN_THUMBNAIL_SIZE, THUMBNAIL_OFFSET
from .signals import get_generic_update_signal

Mark = Dict[str, Any]
Signal = Dict[str, Any]


@dataclass(frozen=True)
class AxisThumbnailSpec:
    name: str
    url_key: str


def scale_type_supports_thumbnails(scale_type: Optional[str]) -> bool:
    return scale_type == "band"


def get_axis_thumbnails(options: AxisSpecOptions) -> List[AxisThumbnailSpec]:
    return [
        AxisThumbnailSpec(
            name=f"{options.name}AxisThumbnail{index}",
            url_key=thumbnail.url_key or DEFAULT_THUMBNAIL_URL_KEY,
        )
        for index, thumbnail in enumerate(options.axis_thumbnails)
    ]


def size_signal_name(thumbnail_name: str) -> str:
    return f"{thumbnail_name}ThumbnailSize"


def add_axis_thumbnail_signals(signals: List[Signal], thumbnail_name: str, scale_name: str) -> None:
    signals.append(
        get_generic_update_signal(
            size_signal_name(thumbnail_name), f"min(bandwidth('{scale_name}'), {MAX_THUMBNAIL_SIZE})"
        )
    )


def get_axis_thumbnail_position(
    scale_name: str, scale_field: str, position: Position, thumbnail_name: str
) -> Dict[str, Any]:
    """x/y encodings that put the thumbnail just outside the plot, centered on its band."""

    size = size_signal_name(thumbnail_name)
    center = {"signal": f"scale('{scale_name}', datum.{scale_field}) + bandwidth('{scale_name}') / 2"}
    position = Position(position)
    if position == Position.left:
        return {"x": {"signal": f"-{THUMBNAIL_OFFSET} - {size}"}, "yc": center}
    if position == Position.right:
        return {"x": {"signal": f"width + {THUMBNAIL_OFFSET}"}, "yc": center}
    if position == Position.top:
        return {"xc": center, "y": {"signal": f"-{THUMBNAIL_OFFSET} - {size}"}}
    return {"xc": center, "y": {"signal": f"height + {THUMBNAIL_OFFSET}"}}


def get_axis_thumbnail_marks(options: AxisSpecOptions, scale_name: str, scale_field: str) -> List[Mark]:
    marks = []
    for thumbnail in get_axis_thumbnails(options):
        size = size_signal_name(thumbnail.name)
        marks.append(
            {
                "type": "image",
                "name": thumbnail.name,
                "from": {"data": FILTERED_TABLE},
                "encode": {
                    "enter": {"url": {"field": thumbnail.url_key}},
                    "update": {
                        **get_axis_thumbnail_position(scale_name, scale_field, options.position, thumbnail.name),
                        "width": {"signal": size},
                        "height": {"signal": size},
                        "opacity": [{"test": f"{size} < {MIN_THUMBNAIL_SIZE}", "value": 0}, {"value": 1}],
                    },
                },
            }
        )
    return marks


def get_axis_thumbnail_label_offset(thumbnail_name: str, position: Position) -> Dict[str, Any]:
    """Push labels past the thumbnail; no offset while the thumbnail is hidden."""

    size = size_signal_name(thumbnail_name)
    hidden = {"test": f"{size} < {MIN_THUMBNAIL_SIZE}", "value": 0}
    position = Position(position)
    if position == Position.left:
        return {"dx": [hidden, {"signal": f"-{size}"}]}
    if position == Position.right:
        return {"dx": [hidden, {"signal": size}]}
    if position == Position.top:
        return {"dy": [hidden, {"signal": f"-{size}"}]}
    return {"dy": [hidden, {"signal": size}]}
