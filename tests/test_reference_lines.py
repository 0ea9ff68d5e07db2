from chartspec.schemas.axis import AxisOptions, normalize_axis_options
from chartspec.services.axis_synthesizer import get_default_axis
from chartspec.services.reference_lines import (
    get_reference_line_marks,
    get_reference_lines,
    hide_labels_under_reference_lines,
    scale_type_supports_reference_lines,
)


def _options(**kwargs):
    scale_type = kwargs.pop("scale_type", "linear")
    return normalize_axis_options(AxisOptions(**kwargs), scale_type=scale_type)


def test_supported_scale_types():
    assert scale_type_supports_reference_lines("linear")
    assert scale_type_supports_reference_lines("time")
    assert not scale_type_supports_reference_lines("band")


def test_reference_lines_get_defaults():
    lines = get_reference_lines(_options(position="bottom", reference_lines=[{"value": 5}]))
    assert lines[0].name == "axis0ReferenceLine0"
    assert lines[0].color == "gray-800"
    assert lines[0].layer.value == "front"


def test_labels_hidden_in_declaration_order():
    options = _options(
        position="bottom",
        reference_lines=[
            {"value": 10, "icon": "date"},
            {"value": 20, "label": "Target"},
            {"value": 30},
            {"value": 40, "icon": "date", "position": "before"},
        ],
    )
    axis = get_default_axis(options, "xLinear")
    hide_labels_under_reference_lines(axis, options, "xLinear")
    text = axis["encode"]["labels"]["update"]["text"]
    assert len(text) == 4
    assert text[0] == {
        "test": "abs(scale('xLinear', 10) - scale('xLinear', datum.value)) < 30",
        "value": "",
    }
    assert text[1]["test"].startswith("abs(scale('xLinear', 20)")
    assert text[2]["signal"] == "formatShortNumber(datum['value'])"


def test_duration_labels_are_left_alone():
    options = _options(position="left", label_format="duration", reference_lines=[{"value": 1, "icon": "date"}])
    axis = get_default_axis(options, "yLinear")
    hide_labels_under_reference_lines(axis, options, "yLinear")
    assert axis["encode"]["labels"]["update"]["text"] == {"signal": "formatTimeDurationLabels(datum)"}


def test_reference_line_marks_by_layer():
    options = _options(
        position="bottom",
        ticks=True,
        reference_lines=[
            {"value": 10, "icon": "date", "label": "Launch"},
            {"value": 20, "layer": "back"},
        ],
    )
    marks = get_reference_line_marks(options, "xLinear")
    assert [mark["name"] for mark in marks["front"]] == [
        "axis0ReferenceLine0",
        "axis0ReferenceLine0_symbol",
        "axis0ReferenceLine0_label",
    ]
    assert [mark["name"] for mark in marks["back"]] == ["axis0ReferenceLine1"]

    rule, symbol, label = marks["front"]
    assert rule["encode"]["update"]["y2"] == {"signal": "height + 9"}
    assert rule["encode"]["enter"]["stroke"] == {"value": "rgb(34, 34, 34)"}
    assert symbol["encode"]["enter"]["size"] == {"value": 324}
    assert symbol["encode"]["update"]["y"] == {"signal": "height + 24"}
    assert rule["encode"]["enter"]["strokeDash"] == {"value": []}
    assert label["encode"]["update"]["y"] == {"signal": "height + 50"}
    assert label["encode"]["update"]["align"] == {"value": "center"}


def test_vertical_reference_line_label():
    options = _options(position="left", reference_lines=[{"value": 3, "label": "Goal"}])
    label = get_reference_line_marks(options, "yLinear")["front"][1]
    update = label["encode"]["update"]
    assert update["x"] == {"value": -28}
    assert update["y"] == {"scale": "yLinear", "value": 3, "offset": 4}
    assert update["baseline"] == {"value": "middle"}


def test_label_offsets_with_and_without_icon():
    options = _options(position="bottom", reference_lines=[{"value": 3, "label": "Goal"}])
    label = get_reference_line_marks(options, "xLinear")["front"][1]
    assert label["encode"]["update"]["y"] == {"signal": "height + 28"}

    options = _options(position="right", reference_lines=[{"value": 3, "label": "Goal", "icon": "date"}])
    label = get_reference_line_marks(options, "yLinear")["front"][2]
    assert label["encode"]["update"]["x"] == {"signal": "width + 50"}
    assert label["encode"]["update"]["y"]["offset"] == 4


def test_rule_stroke_dash_from_line_type():
    options = _options(
        position="bottom",
        reference_lines=[
            {"value": 1, "lineType": "dashed"},
            {"value": 2, "lineType": "twoDash"},
            {"value": 3, "lineType": [1, 2]},
        ],
    )
    rules = get_reference_line_marks(options, "xLinear")["front"]
    assert [rule["encode"]["enter"]["strokeDash"] for rule in rules] == [
        {"value": [7, 4]},
        {"value": [5, 2, 11, 2]},
        {"value": [1, 2]},
    ]
