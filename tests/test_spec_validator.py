import pytest

from chartspec.services import MalformedSpecError, SpecBuildError, validate_spec_document


def _spec(**overrides):
    spec = {
        "scales": [{"name": "xBand", "type": "band", "range": "width"}],
        "axes": [{"scale": "xBand", "orient": "bottom"}],
        "marks": [],
        "signals": [],
        "data": [],
    }
    spec.update(overrides)
    return spec


def test_valid_document_passes():
    spec = _spec()
    assert validate_spec_document(spec) is spec


def test_missing_list():
    spec = _spec()
    del spec["signals"]
    with pytest.raises(MalformedSpecError, match="signals must be a list"):
        validate_spec_document(spec)


def test_axis_without_orient():
    with pytest.raises(MalformedSpecError, match="invalid orient"):
        validate_spec_document(_spec(axes=[{"scale": "xBand"}]))


def test_axis_without_scale():
    with pytest.raises(MalformedSpecError, match="missing scale"):
        validate_spec_document(_spec(axes=[{"orient": "left"}]))


def test_duplicate_data_names():
    with pytest.raises(MalformedSpecError, match="duplicate data name 'table'"):
        validate_spec_document(_spec(data=[{"name": "table"}, {"name": "table"}]))


def test_group_axes_are_checked():
    group = {"type": "group", "name": "xTrellisGroup", "axes": [{"scale": "xBand", "orient": "middle"}]}
    with pytest.raises(MalformedSpecError, match=r"marks\[0\]\.axes\[0\]"):
        validate_spec_document(_spec(marks=[group]))


def test_errors_share_a_base():
    assert issubclass(MalformedSpecError, SpecBuildError)
    assert issubclass(SpecBuildError, RuntimeError)
