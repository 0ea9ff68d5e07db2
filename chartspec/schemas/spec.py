from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .axis import AxisOptions, ColorScheme, Orientation


class CompileAxesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    spec: Dict[str, Any] = Field(default_factory=dict)
    axes: List[AxisOptions]
    chart_orientation: Optional[Orientation] = None
    color_scheme: Optional[ColorScheme] = None


class CompileAxesResponse(BaseModel):
    spec: Dict[str, Any]
    axis_count: int
    mark_count: int
