from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..core.settings import get_settings
from ..schemas.axis import (
    AxisOptions,
    AxisSpecOptions,
    ColorScheme,
    Label,
    LabelFormat,
    Orientation,
    Position,
    normalize_axis_options,
)
from ..utils.merge import deep_merge, drop_none, freeze, thaw
from .axis_annotations import (
    add_axis_annotation_axis,
    add_axis_annotation_data,
    add_axis_annotation_marks,
    add_axis_annotation_signals,
    get_axis_annotations,
)
from .axis_labels import get_axis_labels_encoding, get_controlled_label_anchor_values, get_label_value
from .axis_synthesizer import (
    apply_sub_label_title_padding,
    get_baseline_rule,
    get_default_axis,
    get_sub_label_axis,
    get_time_axes,
    has_sub_labels,
    set_axis_baseline,
)
from .axis_thumbnails import (
    add_axis_thumbnail_signals,
    get_axis_thumbnail_label_offset,
    get_axis_thumbnail_marks,
    get_axis_thumbnails,
    scale_type_supports_thumbnails,
)
from .constants import FIRST_RSC_SERIES_ID
from .context import BuildContext
from .dual_metric_axis import handle_dual_metric_axis_config
from .errors import BuilderClosedError
from .reference_lines import get_reference_line_marks, hide_labels_under_reference_lines, scale_type_supports_reference_lines
from .scale_resolver import get_scale_field, is_vertical_axis, resolve_opposing_scale_type, resolve_scale
from .signals import get_generic_value_signal
from .spec_validator import validate_spec_document
from .trellis import encode_axis_title, find_trellis_group, get_trellis_axis_options, get_trellis_orientation, is_trellised_chart

logger = logging.getLogger(__name__)

Axis = Dict[str, Any]
Mark = Dict[str, Any]
Spec = Dict[str, Any]

_LISTS = ("scales", "axes", "marks", "signals", "data")


@dataclass(frozen=True)
class SpecDocument:
    """Finalized output of one chart build.

    Every nested object is read-only: mappings are ``MappingProxyType`` and
    arrays are tuples. ``to_dict`` returns a plain, mutable copy.
    """

    scales: Tuple[Mapping[str, Any], ...]
    axes: Tuple[Mapping[str, Any], ...]
    marks: Tuple[Mapping[str, Any], ...]
    signals: Tuple[Mapping[str, Any], ...]
    data: Tuple[Mapping[str, Any], ...]
    usermeta: Optional[Mapping[str, Any]] = None
    extra: Mapping[str, Any] = field(default_factory=lambda: freeze({}))

    def to_dict(self) -> Spec:
        spec = thaw(self.extra)
        for key in _LISTS:
            spec[key] = thaw(getattr(self, key))
        if self.usermeta is not None:
            spec["usermeta"] = thaw(self.usermeta)
        return spec


def get_label_signal_value(
    labels: Iterable[Union[Label, str, float, int]], position: Position, label_orientation: Orientation
) -> List[Dict[str, Any]]:
    """Styled labels for the ``{axis}_labels`` signal; bare values need no entry."""

    values = []
    for label in labels:
        if not isinstance(label, Label):
            continue
        values.append(
            {
                **label.model_dump(by_alias=True, exclude_none=True, mode="json"),
                **drop_none(get_controlled_label_anchor_values(position, label_orientation, label.align)),
            }
        )
    return values


def get_sub_label_signal_value(options: AxisSpecOptions) -> List[Dict[str, Any]]:
    return [
        {
            **sub_label.model_dump(by_alias=True, exclude_none=True, mode="json"),
            **drop_none(
                get_controlled_label_anchor_values(options.position, options.label_orientation, sub_label.align)
            ),
        }
        for sub_label in options.sub_labels
    ]


def _merge_axis_encode(axis: Axis, encodings: Dict[str, Any]) -> None:
    axis["encode"] = deep_merge(axis["encode"], encodings) if axis.get("encode") else encodings


def build_axes(
    options: AxisSpecOptions,
    *,
    scale_name: str,
    opposing_scale_type: Optional[str],
    dual_metric_axis: bool,
    context: BuildContext,
) -> List[Axis]:
    """Synthesize every output axis for one axis description, decorators included."""

    trellis_options = get_trellis_axis_options(scale_name)
    if trellis_options:
        options = options.model_copy(update=trellis_options)

    new_axes: List[Axis] = []
    if options.label_format == LabelFormat.time:
        new_axes.extend(get_time_axes(scale_name, options))
        if has_sub_labels(options):
            apply_sub_label_title_padding(new_axes[0])
            new_axes.append(get_sub_label_axis(options, scale_name))
    else:
        axis = get_default_axis(options, scale_name)
        if options.labels:
            axis["values"] = [get_label_value(label) for label in options.labels]
            encoding = get_axis_labels_encoding(
                options.label_align,
                options.label_font_weight,
                "label",
                options.label_orientation,
                options.position,
                f"{options.name}_labels",
            )
            if options.has_tooltip:
                encoding["update"]["tooltip"] = {"signal": "datum.value"}
            axis["encode"] = {"labels": {"interactive": options.has_tooltip, **encoding}}

        if has_sub_labels(options):
            apply_sub_label_title_padding(axis)
            sub_label_axis = get_sub_label_axis(options, scale_name)
            handle_dual_metric_axis_config(
                dual_metric_axis=dual_metric_axis,
                axis=sub_label_axis,
                context=context,
                scale_name=scale_name,
                position=options.position,
                increment_metric_axis_count=False,
            )
            new_axes.append(sub_label_axis)
        elif options.sub_labels:
            logger.debug("%s: sub-labels need horizontal label orientation, skipped", options.name)

        handle_dual_metric_axis_config(
            dual_metric_axis=dual_metric_axis,
            axis=axis,
            context=context,
            scale_name=scale_name,
            position=options.position,
            increment_metric_axis_count=True,
        )
        new_axes.insert(0, axis)

    if opposing_scale_type != "linear":
        new_axes[0] = set_axis_baseline(new_axes[0], options.baseline)

    if scale_type_supports_reference_lines(options.scale_type):
        hide_labels_under_reference_lines(new_axes[0], options, scale_name)

    if scale_type_supports_thumbnails(options.scale_type):
        for thumbnail in get_axis_thumbnails(options):
            encodings = {"labels": {"update": get_axis_thumbnail_label_offset(thumbnail.name, options.position)}}
            for axis in new_axes:
                _merge_axis_encode(axis, encodings)

    for annotation in get_axis_annotations(options):
        add_axis_annotation_axis(new_axes, annotation, scale_name)

    return new_axes


class SpecBuilder:
    """Owns the growing document for one chart build.

    ``finalize`` closes the builder; a closed builder raises ``BuilderClosedError``
    on any further mutation.
    """

    def __init__(self, spec: Optional[Spec] = None, context: Optional[BuildContext] = None) -> None:
        spec = deepcopy(spec or {})
        self.scales: List[Dict[str, Any]] = spec.pop("scales", None) or []
        self.axes: List[Axis] = spec.pop("axes", None) or []
        self.marks: List[Mark] = spec.pop("marks", None) or []
        self.signals: List[Dict[str, Any]] = spec.pop("signals", None) or []
        self.data: List[Dict[str, Any]] = spec.pop("data", None) or []
        self.usermeta: Optional[Dict[str, Any]] = spec.pop("usermeta", None)
        self.extra: Dict[str, Any] = spec
        self.context = context or context_from_usermeta(self.usermeta)
        self._next_index = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise BuilderClosedError("spec builder was already finalized")

    def as_dict(self) -> Spec:
        """Live view of the document; not a copy."""

        return {**self.extra, **{key: getattr(self, key) for key in _LISTS}, "usermeta": self.usermeta or {}}

    def has_signal(self, name: str) -> bool:
        return any(signal.get("name") == name for signal in self.signals)

    def add_axis(self, options: Union[AxisOptions, Dict[str, Any]], *, index: Optional[int] = None) -> "SpecBuilder":
        self._ensure_open()
        if not isinstance(options, AxisOptions):
            options = AxisOptions.model_validate(options)
        if index is None:
            index = self._next_index
        self._next_index = index + 1

        scale = resolve_scale(self.scales, options.position)
        scale_name = options.name or scale["name"]
        scale_type = scale.get("type") or "linear"
        scale_field = get_scale_field(scale)
        opposing_scale_type = resolve_opposing_scale_type(self.scales, options.position)

        axis_options = normalize_axis_options(
            options, scale_type=scale_type, color_scheme=self.context.color_scheme, index=index
        )
        if options.dual_metric_axis is None:
            dual_metric_axis = self.has_signal(FIRST_RSC_SERIES_ID)
        else:
            dual_metric_axis = options.dual_metric_axis

        self._add_axis_data(axis_options)
        self._add_axis_signals(axis_options, scale_name)

        if options.range and scale_type in ("linear", "time"):
            scale["domain"] = list(options.range)
            if options.range[0] != 0:
                scale["zero"] = False

        # the chart-level axis of a trellised chart never draws the grid
        grid = axis_options.grid and not is_trellised_chart(self.as_dict())
        self.axes.extend(
            build_axes(
                axis_options.model_copy(update={"grid": grid}),
                scale_name=scale_name,
                opposing_scale_type=opposing_scale_type,
                dual_metric_axis=dual_metric_axis,
                context=self.context,
            )
        )
        self._add_axes_marks(axis_options, scale_name, scale_field, opposing_scale_type)
        return self

    def _add_axis_data(self, options: AxisSpecOptions) -> None:
        annotations = get_axis_annotations(options)
        if options.axis_annotations and not annotations:
            logger.debug("%s: annotations are only drawn on bottom axes, skipped", options.name)
        for annotation in annotations:
            add_axis_annotation_data(self.data, annotation)

    def _add_axis_signals(self, options: AxisSpecOptions, scale_name: str) -> None:
        if options.labels:
            self.signals.append(
                get_generic_value_signal(
                    f"{options.name}_labels",
                    get_label_signal_value(options.labels, options.position, options.label_orientation),
                )
            )
        if has_sub_labels(options):
            self.signals.append(get_generic_value_signal(f"{options.name}_subLabels", get_sub_label_signal_value(options)))
        for annotation in get_axis_annotations(options):
            add_axis_annotation_signals(self.signals, annotation)
        for thumbnail in get_axis_thumbnails(options):
            add_axis_thumbnail_signals(self.signals, thumbnail.name, scale_name)

    def _add_axes_marks(
        self,
        options: AxisSpecOptions,
        scale_name: str,
        scale_field: Optional[str],
        opposing_scale_type: Optional[str],
    ) -> None:
        if scale_type_supports_reference_lines(options.scale_type):
            layers = get_reference_line_marks(options, scale_name)
            self.marks[0:0] = layers["back"]
            self.marks.extend(layers["front"])
        elif options.reference_lines:
            logger.debug("%s: %s scales do not support reference lines", options.name, options.scale_type)

        trellis_group = find_trellis_group(self.marks)

        if options.baseline and opposing_scale_type == "linear":
            self._add_baseline(options, trellis_group)

        if trellis_group is not None:
            self._add_axes_to_trellis_group(options, trellis_group, scale_name, opposing_scale_type)

        for annotation in get_axis_annotations(options):
            add_axis_annotation_marks(self.marks, annotation, scale_name)

        if scale_type_supports_thumbnails(options.scale_type) and scale_field:
            self.marks.extend(get_axis_thumbnail_marks(options, scale_name, scale_field))
        elif options.axis_thumbnails:
            logger.debug("%s: thumbnails need a band scale with a data field, skipped", options.name)

    def _add_baseline(self, options: AxisSpecOptions, trellis_group: Optional[Mark]) -> None:
        rule = get_baseline_rule(options.baseline_offset, options.position)
        # a zero baseline is drawn over the data, any other offset under it
        target = trellis_group.setdefault("marks", []) if trellis_group is not None else self.marks
        if options.baseline_offset == 0:
            target.append(rule)
        else:
            target.insert(0, rule)

    def _add_axes_to_trellis_group(
        self,
        options: AxisSpecOptions,
        group: Mark,
        scale_name: str,
        opposing_scale_type: Optional[str],
    ) -> None:
        trellis_orientation = get_trellis_orientation(group)
        axis_orientation = "vertical" if is_vertical_axis(options.position) else "horizontal"
        same_orientation = trellis_orientation == axis_orientation

        # an x axis on a vertical trellis has no labels of its own
        update: Dict[str, Any] = {"hide_default_labels": options.hide_default_labels or not same_orientation}
        if same_orientation:
            scale = resolve_scale(group.get("scales", []), options.position)
            scale_name = scale["name"]
            update["scale_type"] = scale.get("type") or "linear"
        else:
            # the chart-level axis already shows the title
            update["title"] = None

        axes = build_axes(
            options.model_copy(update=update),
            scale_name=scale_name,
            opposing_scale_type=opposing_scale_type,
            dual_metric_axis=False,
            context=self.context,
        )
        group["axes"] = [*group.get("axes", []), *encode_axis_title(axes, group)]

    def finalize(self) -> SpecDocument:
        self._ensure_open()
        self._closed = True
        # usermeta is only emitted when the caller sent one or the build wrote to it
        usermeta = {**(self.usermeta or {}), **self.context.to_usermeta()}
        if self.usermeta is None and not usermeta:
            usermeta = None
        return SpecDocument(
            scales=freeze(self.scales),
            axes=freeze(self.axes),
            marks=freeze(self.marks),
            signals=freeze(self.signals),
            data=freeze(self.data),
            usermeta=freeze(usermeta) if usermeta is not None else None,
            extra=freeze(self.extra),
        )


def context_from_usermeta(usermeta: Optional[Dict[str, Any]] = None) -> BuildContext:
    """Fresh context seeded from the document's usermeta, falling back to settings."""

    settings = get_settings()
    usermeta = usermeta or {}
    return BuildContext(
        chart_orientation=Orientation(usermeta.get("chartOrientation") or settings.chart_orientation),
        color_scheme=ColorScheme(usermeta.get("colorScheme") or settings.color_scheme),
        metric_axis_count=usermeta.get("metricAxisCount"),
    )


def compile_axes(
    spec: Optional[Spec],
    axes: Iterable[Union[AxisOptions, Dict[str, Any]]],
    context: Optional[BuildContext] = None,
    *,
    validate: Optional[bool] = None,
) -> SpecDocument:
    """Compile ``axes`` into ``spec`` in declared order and return the finalized document."""

    builder = SpecBuilder(spec, context)
    for index, options in enumerate(axes):
        builder.add_axis(options, index=index)
    document = builder.finalize()
    if validate is None:
        validate = get_settings().validate_output
    if validate:
        validate_spec_document(document.to_dict())
    logger.debug("compiled %d axes, %d marks", len(document.axes), len(document.marks))
    return document
