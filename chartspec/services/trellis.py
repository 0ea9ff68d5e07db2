from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Optional

from ..schemas.axis import Position

Axis = Dict[str, Any]
Mark = Dict[str, Any]

_TRELLIS_GROUP = re.compile(r"[xy]TrellisGroup")


def is_trellised_chart(spec: Dict[str, Any]) -> bool:
    return bool(_TRELLIS_GROUP.search(json.dumps(spec)))


def find_trellis_group(marks: List[Mark]) -> Optional[Mark]:
    return next((mark for mark in marks if "Trellis" in (mark.get("name") or "")), None)


def get_trellis_orientation(group: Mark) -> str:
    return "horizontal" if (group.get("name") or "").startswith("x") else "vertical"


def get_trellis_axis_options(scale_name: str) -> Dict[str, Any]:
    """Header styling for axes bound to a trellis band scale; empty for every other scale.

    Keys are ``AxisSpecOptions`` field names, ready for ``model_copy(update=...)``.
    """

    if "TrellisBand" not in scale_name:
        return {}
    # shift the labels up/left half a band so they sit over the facet
    offset_signal = f"bandwidth('{scale_name}') / -2"
    is_x = scale_name.startswith("x")
    return {
        "position": Position.top if is_x else Position.left,
        "label_font_weight": "bold",
        "label_align": None,
        "title": None,
        "vega_label_align": "left",
        "vega_label_baseline": "bottom",
        "vega_label_offset": {"signal": offset_signal} if is_x else {"signal": f"{offset_signal} - 8"},
        "vega_label_padding": 8 if is_x else 0,
    }


def get_trellis_group_properties(group: Mark) -> Dict[str, str]:
    facet = group.get("from", {}).get("facet", {})
    return {
        "facet_group_by": facet.get("groupby"),
        "facet_name": facet.get("name"),
        "trellis_scale_name": f"{(group.get('name') or 'x')[0]}TrellisBand",
    }


def encode_axis_title(axes: List[Axis], group: Mark) -> List[Axis]:
    """Return copies of ``axes`` whose titles are only visible on the first facet."""

    props = get_trellis_group_properties(group)
    test = (
        f"info(domain('{props['trellis_scale_name']}')[0] === "
        f"data('{props['facet_name']}')[0].{props['facet_group_by']})"
    )
    encoded = []
    for axis in axes:
        if axis.get("title"):
            axis = {
                **axis,
                "encode": {
                    **axis.get("encode", {}),
                    "title": {"update": {"opacity": [{"test": test, "value": 1}, {"value": 0}]}},
                },
            }
        encoded.append(axis)
    return encoded
