from chartspec.schemas.axis import ColorScheme, Orientation, Position
from chartspec.services.context import BuildContext
from chartspec.services.dual_metric_axis import (
    add_dual_metric_axis_config,
    handle_dual_metric_axis_config,
)


def _handle(axis, context, position=Position.left, increment=True, dual=True):
    handle_dual_metric_axis_config(
        dual_metric_axis=dual,
        axis=axis,
        context=context,
        scale_name="yLinear",
        position=position,
        increment_metric_axis_count=increment,
    )


def test_first_metric_axis_is_primary_then_secondary():
    context = BuildContext()
    first = {"scale": "yLinear", "orient": "left"}
    second = {"scale": "yLinear", "orient": "right"}

    _handle(first, context)
    assert context.metric_axis_count == 1
    assert first["scale"] == "yLinearPrimary"
    fill = first["encode"]["labels"]["update"]["fill"]
    assert fill[0] == {
        "test": "length(domain('color')) -1 === 1",
        "signal": "scale('color', firstRscSeriesId)",
    }
    assert fill[1] == {"value": "rgb(34, 34, 34)"}
    assert first["encode"]["title"]["update"]["fillOpacity"] == [
        {"test": "mouseOverSeries === lastRscSeriesId", "value": 0.2}
    ]

    _handle(second, context, Position.right)
    assert context.metric_axis_count == 2
    assert second["scale"] == "yLinearSecondary"
    assert second["encode"]["labels"]["enter"]["fill"] == [{"signal": "scale('color', lastRscSeriesId)"}]
    assert second["encode"]["labels"]["update"]["fillOpacity"] == [
        {"test": "isValid(mouseOverSeries) && mouseOverSeries !== lastRscSeriesId", "value": 0.2}
    ]


def test_non_metric_axis_is_untouched():
    context = BuildContext()
    axis = {"scale": "xBand", "orient": "bottom"}
    _handle(axis, context, Position.bottom)
    assert axis == {"scale": "xBand", "orient": "bottom"}
    assert context.metric_axis_count is None


def test_horizontal_chart_measures_bottom_axis():
    context = BuildContext(chart_orientation=Orientation.horizontal)
    axis = {"scale": "xLinear", "orient": "bottom"}
    _handle(axis, context, Position.bottom)
    assert axis["scale"] == "yLinearPrimary"
    assert context.metric_axis_count == 1


def test_companion_axis_does_not_increment():
    context = BuildContext()
    _handle({"scale": "yLinear"}, context, increment=False)
    assert context.metric_axis_count == 0


def test_disabled_flag_skips_everything():
    context = BuildContext()
    axis = {"scale": "yLinear"}
    _handle(axis, context, dual=False)
    assert "encode" not in axis
    assert context.metric_axis_count is None
    assert context.to_usermeta() == {}


def test_primary_encodings_merge_with_existing_encode():
    axis = {"scale": "yLinear", "encode": {"labels": {"update": {"text": [{"signal": "datum.value"}]}}}}
    add_dual_metric_axis_config(axis, True, "yLinear", ColorScheme.dark)
    update = axis["encode"]["labels"]["update"]
    assert update["text"] == [{"signal": "datum.value"}]
    assert update["fill"][1] == {"value": "rgb(235, 235, 235)"}
