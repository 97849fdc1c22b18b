import pytest
from fastapi.testclient import TestClient

from api.main import app


client = TestClient(app)

COLUMN_TYPES = [
    {"name": "product", "type": "string"},
    {"name": "units", "type": "numeric"},
]
ROWS = [["a", "10"], ["b", "20"], ["c", ""]]


def test_meta_endpoints():
    res = client.get("/meta/chart-types")
    assert res.status_code == 200
    assert {"label": "3D Surface", "value": "surface"} in res.json()["chart_types"]
    res = client.get("/meta/color-schemes")
    assert [o["value"] for o in res.json()["color_schemes"]] == ["default", "viridis", "plasma", "warm", "cool"]


def test_suggest():
    res = client.post("/suggest", json={"column_types": COLUMN_TYPES, "headers": ["product", "units"], "rows": ROWS})
    assert res.status_code == 200
    assert res.json() == {"chart_type": "pie", "x_axis": "product", "y_axis": "units", "z_axis": None}


def test_suggest_length_mismatch():
    res = client.post("/suggest", json={"column_types": COLUMN_TYPES, "headers": ["product"]})
    assert res.status_code == 422
    assert res.json()["type"] == "ColumnMismatchError"


def test_suggest_rejects_unknown_type():
    res = client.post("/suggest", json={"column_types": [{"name": "x", "type": "money"}], "headers": ["x"]})
    assert res.status_code == 422


def test_prepare():
    body = {
        "chart_config": {"chart_type": "bar", "x_axis": "product", "y_axis": "units"},
        "column_types": COLUMN_TYPES,
        "rows": ROWS,
        "dark_mode": True,
    }
    res = client.post("/prepare", json=body)
    assert res.status_code == 200
    payload = res.json()
    assert payload["data"][0]["x"] == ["a", "b", "c"]
    assert payload["data"][0]["y"] == [10.0, 20.0, None]
    assert payload["data"][0]["marker"]["color"] == "#63B3ED"
    assert payload["warnings"] == {"numeric": False}
    assert payload["download_format"] == "svg"


@pytest.mark.parametrize("n,expected", [(1000, "scatter"), (1001, "scattergl")])
def test_prepare_large_scatter(n, expected):
    body = {
        "chart_config": {"chart_type": "scatter", "x_axis": "x", "y_axis": "y"},
        "column_types": [{"name": "x", "type": "numeric"}, {"name": "y", "type": "numeric"}],
        "rows": [[i, i] for i in range(n)],
    }
    assert client.post("/prepare", json=body).json()["data"][0]["type"] == expected


def test_prepare_empty_rows():
    body = {"chart_config": {"chart_type": "surface", "x_axis": "x", "y_axis": "y"}, "column_types": [], "rows": []}
    res = client.post("/prepare", json=body)
    assert res.status_code == 200
    assert res.json()["data"] == [{}]


def test_render_saved_analysis():
    body = {
        "chart_config": {"chartType": "line", "xAxis": "day", "yAxis": "sales", "zAxis": ""},
        "data_sample": {"headers": ["day", "sales"], "rows": [["2024-01-01", "5"]]},
    }
    res = client.post("/analyses/render", json=body)
    assert res.status_code == 200
    trace = res.json()["data"][0]
    assert trace["x"] == ["2024-01-01T00:00:00"]
    assert trace["y"] == [5.0]


def test_analysis_payload():
    body = {
        "name": "Units by product",
        "chart_config": {"chart_type": "bar", "x_axis": "product", "y_axis": "units"},
        "headers": ["product", "units"],
        "rows": ROWS + [["d", "1"]],
    }
    res = client.post("/analyses/payload", json=body)
    assert res.status_code == 200
    payload = res.json()
    assert payload["dataSample"]["totalRows"] == 4
    assert len(payload["dataSample"]["rows"]) == 3
    assert payload["chartConfig"]["title"] == "product v/s units"


def test_analysis_payload_requires_name():
    body = {"chart_config": {"chart_type": "bar", "x_axis": "a", "y_axis": "b"}, "headers": ["a", "b"]}
    res = client.post("/analyses/payload", json=body)
    assert res.status_code == 422
    assert res.json()["type"] == "AnalysisPayloadError"
