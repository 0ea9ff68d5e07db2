from chartspec.schemas.axis import AxisOptions, Position, normalize_axis_options
from chartspec.services.axis_synthesizer import (
    get_baseline_rule,
    get_default_axis,
    get_sub_label_axis,
    get_time_axes,
    has_sub_labels,
    set_axis_baseline,
)


def _options(**kwargs):
    scale_type = kwargs.pop("scale_type", "linear")
    return normalize_axis_options(AxisOptions(**kwargs), scale_type=scale_type)


def test_default_axis_omits_unset_properties():
    axis = get_default_axis(_options(position="bottom"), "xLinear")
    assert axis["scale"] == "xLinear"
    assert axis["orient"] == "bottom"
    assert axis["labels"] is True
    assert axis["labelAngle"] == 0
    assert axis["labelAlign"] == "center"
    assert axis["labelBaseline"] == "top"
    for key in ("title", "tickCount", "labelOffset", "labelPadding"):
        assert key not in axis
    assert axis["encode"]["labels"]["interactive"] is False


def test_default_axis_min_step_only_on_linear():
    assert get_default_axis(_options(position="left", tick_min_step=5), "yLinear")["tickMinStep"] == 5
    band = get_default_axis(_options(position="left", tick_min_step=5, scale_type="band"), "yBand")
    assert "tickMinStep" not in band


def test_vertical_labels_are_rotated():
    axis = get_default_axis(_options(position="bottom", label_orientation="vertical"), "xLinear")
    assert axis["labelAngle"] == 270


def test_horizontal_time_axis_splits_in_two():
    axes = get_time_axes("xTime", _options(position="bottom", scale_type="time"))
    assert len(axes) == 2
    secondary, primary = axes
    assert secondary["formatType"] == "time"
    assert secondary["format"] == "%-d"
    assert secondary["labelSeparation"] == 12
    assert secondary["tickCount"] == "day"
    assert primary["format"] == "%b"
    assert primary["labelOverlap"] == "greedy"
    assert primary["encode"]["labels"]["enter"]["dy"] == {"value": 20}
    assert primary["encode"]["labels"]["update"]["text"] == {"signal": "formatHorizontalTimeAxisLabels(datum)"}


def test_top_time_axis_with_ticks_shifts_up():
    axes = get_time_axes("xTime", _options(position="top", ticks=True, scale_type="time"))
    assert axes[1]["encode"]["labels"]["enter"]["dy"] == {"value": -28}


def test_vertical_time_axis_is_single():
    axes = get_time_axes("yLinear", _options(position="left", scale_type="time", granularity="month"))
    assert len(axes) == 1
    assert axes[0]["format"] == "%Y\u2000%b"
    assert axes[0]["encode"]["labels"]["update"]["text"] == {"signal": "formatVerticalAxisTimeLabels(datum)"}
    # tick interval is only forced on scales named for time
    assert "tickCount" not in axes[0]


def test_sub_label_axis():
    options = _options(
        position="bottom",
        title="Category",
        sub_labels=[{"value": "A", "subLabel": "first"}],
        scale_type="band",
    )
    assert has_sub_labels(options)
    axis = get_sub_label_axis(options, "xBand")
    assert axis["domain"] is False
    assert axis["grid"] is False
    assert axis["ticks"] is False
    assert axis["labelPadding"] == 24
    assert axis["values"] == ["A"]
    assert "title" not in axis
    assert axis["encode"]["labels"]["interactive"] is False
    assert axis["encode"]["labels"]["update"]["text"][0]["signal"].endswith(".subLabel")


def test_sub_labels_need_horizontal_labels():
    options = _options(position="bottom", label_orientation="vertical", sub_labels=[{"value": "A", "subLabel": "a"}])
    assert not has_sub_labels(options)


def test_axis_baseline():
    axis = set_axis_baseline({"scale": "xBand", "orient": "bottom"}, True)
    assert axis["domain"] is True
    assert axis["domainWidth"] == 2


def test_baseline_rule():
    rule = get_baseline_rule(0, Position.bottom)
    assert rule["name"] == "xBaseline"
    assert rule["encode"]["update"]["y"] == {"scale": "yLinear", "value": 0}
    rule = get_baseline_rule(3, Position.left)
    assert rule["name"] == "yBaseline"
    assert rule["encode"]["update"]["x"] == {"scale": "xLinear", "value": 3}
