from chartspec.schemas.axis import AxisOptions, Position, normalize_axis_options
from chartspec.services.axis_thumbnails import (
    add_axis_thumbnail_signals,
    get_axis_thumbnail_label_offset,
    get_axis_thumbnail_marks,
    get_axis_thumbnail_position,
    get_axis_thumbnails,
    scale_type_supports_thumbnails,
)


def test_only_band_scales_support_thumbnails():
    assert scale_type_supports_thumbnails("band")
    assert not scale_type_supports_thumbnails("point")
    assert not scale_type_supports_thumbnails(None)


def test_thumbnail_defaults_and_signal():
    options = normalize_axis_options(
        AxisOptions(position="left", axis_thumbnails=[{}, {"urlKey": "image"}]), scale_type="band"
    )
    thumbnails = get_axis_thumbnails(options)
    assert [t.name for t in thumbnails] == ["axis0AxisThumbnail0", "axis0AxisThumbnail1"]
    assert [t.url_key for t in thumbnails] == ["thumbnail", "image"]

    signals = []
    add_axis_thumbnail_signals(signals, thumbnails[0].name, "yBand")
    assert signals == [{"name": "axis0AxisThumbnail0ThumbnailSize", "update": "min(bandwidth('yBand'), 64)"}]


def test_left_thumbnail_mark():
    options = normalize_axis_options(AxisOptions(position="left", axis_thumbnails=[{}]), scale_type="band")
    mark = get_axis_thumbnail_marks(options, "yBand", "category")[0]
    assert mark["type"] == "image"
    assert mark["from"] == {"data": "filteredTable"}
    assert mark["encode"]["enter"]["url"] == {"field": "thumbnail"}
    update = mark["encode"]["update"]
    assert update["x"] == {"signal": "-4 - axis0AxisThumbnail0ThumbnailSize"}
    assert update["yc"] == {"signal": "scale('yBand', datum.category) + bandwidth('yBand') / 2"}
    assert update["opacity"] == [
        {"test": "axis0AxisThumbnail0ThumbnailSize < 16", "value": 0},
        {"value": 1},
    ]


def test_thumbnail_positions():
    assert get_axis_thumbnail_position("s", "f", Position.right, "t")["x"] == {"signal": "width + 4"}
    assert get_axis_thumbnail_position("s", "f", Position.top, "t")["y"] == {"signal": "-4 - tThumbnailSize"}
    assert get_axis_thumbnail_position("s", "f", Position.bottom, "t")["y"] == {"signal": "height + 4"}


def test_label_offset():
    assert get_axis_thumbnail_label_offset("t", Position.left) == {
        "dx": [{"test": "tThumbnailSize < 16", "value": 0}, {"signal": "-tThumbnailSize"}]
    }
    assert get_axis_thumbnail_label_offset("t", Position.bottom)["dy"][1] == {"signal": "tThumbnailSize"}
