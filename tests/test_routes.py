from fastapi.testclient import TestClient

from chartspec.main import app

client = TestClient(app)

SPEC = {
    "scales": [
        {"name": "xBand", "type": "band", "range": "width", "domain": {"data": "table", "field": "category"}},
        {"name": "yLinear", "type": "linear", "range": "height"},
    ]
}


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_compile_axes():
    payload = {"spec": SPEC, "axes": [{"position": "bottom"}, {"position": "left", "grid": True}]}
    response = client.post("/spec/axes", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["axis_count"] == 2
    assert [axis["scale"] for axis in body["spec"]["axes"]] == ["xBand", "yLinear"]
    assert body["spec"]["axes"][1]["tickCount"] == {"signal": "clamp(ceil(height/100), 2, 10)"}


def test_chart_orientation_override():
    payload = {
        "spec": {**SPEC, "signals": [{"name": "firstRscSeriesId", "value": None}]},
        "axes": [{"position": "left"}, {"position": "bottom"}],
        "chartOrientation": "horizontal",
    }
    body = client.post("/spec/axes", json=payload).json()
    assert body["spec"]["axes"][0]["scale"] == "yLinear"
    assert body["spec"]["axes"][1]["scale"] == "xBandPrimary"
    assert body["spec"]["usermeta"] == {"metricAxisCount": 1}


def test_usermeta_passes_through_without_dual_metric_axes():
    payload = {"spec": {**SPEC, "usermeta": {}}, "axes": [{"position": "bottom"}]}
    body = client.post("/spec/axes", json=payload).json()
    assert body["spec"]["usermeta"] == {}

    body = client.post("/spec/axes", json={"spec": SPEC, "axes": [{"position": "bottom"}]}).json()
    assert "usermeta" not in body["spec"]


def test_invalid_axis_options():
    response = client.post("/spec/axes", json={"spec": SPEC, "axes": [{"position": "middle"}]})
    assert response.status_code == 422


def test_malformed_spec():
    spec = {**SPEC, "data": [{"name": "table"}, {"name": "table"}]}
    response = client.post("/spec/axes", json={"spec": spec, "axes": [{"position": "bottom"}]})
    assert response.status_code == 422
    assert "duplicate data name" in response.json()["detail"]
