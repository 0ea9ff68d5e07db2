from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Position(str, Enum):
    top = "top"
    bottom = "bottom"
    left = "left"
    right = "right"


class Orientation(str, Enum):
    horizontal = "horizontal"
    vertical = "vertical"


class LabelAlign(str, Enum):
    start = "start"
    center = "center"
    end = "end"


class LabelFormat(str, Enum):
    linear = "linear"
    percentage = "percentage"
    duration = "duration"
    time = "time"


class Granularity(str, Enum):
    minute = "minute"
    hour = "hour"
    day = "day"
    week = "week"
    month = "month"
    quarter = "quarter"
    year = "year"


class ColorScheme(str, Enum):
    light = "light"
    dark = "dark"


class ReferenceLineLayer(str, Enum):
    front = "front"
    back = "back"


class ReferenceLinePosition(str, Enum):
    before = "before"
    center = "center"
    after = "after"


class LineType(str, Enum):
    solid = "solid"
    dashed = "dashed"
    dotted = "dotted"
    dot_dash = "dotDash"
    short_dash = "shortDash"
    long_dash = "longDash"
    two_dash = "twoDash"


class AnnotationFormat(str, Enum):
    span = "span"
    summary = "summary"


LabelValue = Union[str, float, int]


class _OptionsModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
    )


class Label(_OptionsModel):
    """Controlled label anchored to one axis value."""

    value: LabelValue
    label: Optional[str] = None
    align: Optional[LabelAlign] = None
    font_weight: Optional[str] = None


class SubLabel(_OptionsModel):
    value: LabelValue
    sub_label: str
    align: Optional[LabelAlign] = None
    font_weight: Optional[str] = None


class ReferenceLineOptions(_OptionsModel):
    value: LabelValue
    icon: Optional[str] = None
    label: Optional[str] = None
    color: Optional[str] = None
    icon_color: Optional[str] = None
    label_color: Optional[str] = None
    label_font_weight: Optional[str] = None
    layer: ReferenceLineLayer = ReferenceLineLayer.front
    position: ReferenceLinePosition = ReferenceLinePosition.center
    line_type: Union[LineType, List[Union[int, float]]] = LineType.solid


class AxisAnnotationDetail(_OptionsModel):
    id: str
    color: Optional[str] = None


class AxisAnnotationOptions(_OptionsModel):
    name: Optional[str] = None
    format: Optional[AnnotationFormat] = None
    offset: Optional[Union[int, float]] = None
    color: Optional[str] = None
    data_key: Optional[str] = None
    options: List[AxisAnnotationDetail] = Field(default_factory=list)
    has_popover: bool = False


class AxisThumbnailOptions(_OptionsModel):
    url_key: Optional[str] = None


class AxisOptions(_OptionsModel):
    """Caller-facing axis description.

    Decorator lists (reference lines, annotations, thumbnails, sub-labels) are
    plain ordered arrays handed over by the component-tree collaborator.
    """

    position: Position
    name: Optional[str] = None
    baseline: bool = False
    baseline_offset: float = 0
    granularity: Granularity = Granularity.day
    grid: bool = False
    hide_default_labels: bool = False
    label_align: LabelAlign = LabelAlign.center
    label_font_weight: str = "normal"
    label_format: Optional[LabelFormat] = None
    label_orientation: Orientation = Orientation.horizontal
    labels: List[Union[Label, LabelValue]] = Field(default_factory=list)
    number_format: str = "shortNumber"
    range: Optional[Tuple[float, float]] = None
    sub_labels: List[SubLabel] = Field(default_factory=list)
    ticks: bool = False
    tick_count_limit: Optional[int] = None
    tick_min_step: Optional[float] = None
    title: Optional[Union[str, List[str]]] = None
    truncate_labels: bool = False
    has_tooltip: bool = False
    dual_metric_axis: Optional[bool] = None
    reference_lines: List[ReferenceLineOptions] = Field(default_factory=list)
    axis_annotations: List[AxisAnnotationOptions] = Field(default_factory=list)
    axis_thumbnails: List[AxisThumbnailOptions] = Field(default_factory=list)
    # raw label properties, written to the axis as-is when set
    vega_label_align: Optional[str] = None
    vega_label_baseline: Optional[str] = None
    vega_label_offset: Optional[Union[float, Dict[str, Any]]] = None
    vega_label_padding: Optional[float] = None


class AxisSpecOptions(AxisOptions):
    """AxisOptions with every default resolved for one compile pass."""

    name: str
    index: int = 0
    color_scheme: ColorScheme = ColorScheme.light
    scale_type: str = "linear"
    label_format: LabelFormat = LabelFormat.linear
    label_align: Optional[LabelAlign] = LabelAlign.center


def normalize_axis_options(
    options: AxisOptions,
    *,
    scale_type: Optional[str],
    color_scheme: ColorScheme = ColorScheme.light,
    index: int = 0,
) -> AxisSpecOptions:
    """Fill every default once; the result is the only form the compiler reads."""

    resolved_scale_type = scale_type or "linear"
    label_format = options.label_format
    if label_format is None:
        label_format = LabelFormat.time if resolved_scale_type in ("time", "utc") else LabelFormat.linear

    values = options.model_dump(exclude={"name", "label_format"})
    return AxisSpecOptions(
        **values,
        name=f"axis{index}",
        index=index,
        color_scheme=color_scheme,
        scale_type=resolved_scale_type,
        label_format=label_format,
    )
