import math

import pytest
from fastapi.testclient import TestClient

from numstats.main import create_app


@pytest.fixture(scope="module")
def client():
    # entering the context runs the lifespan, which flips the readiness flag
    with TestClient(create_app()) as c:
        yield c


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_ready(client):
    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ready", "default_type": "f64", "max_items": 100_000}


def test_stats_default_type(client):
    r = client.post("/stats", json={"numbers": [1.0, 2.0, 3.0]})
    assert r.status_code == 200
    data = r.json()
    assert data["type"] == "f64"
    assert data["count"] == 3
    assert data["sum"] == 6.0
    assert data["mean"] == 2.0
    assert data["variance"] == pytest.approx(2.0 / 3.0)
    assert data["std_dev"] == pytest.approx(math.sqrt(2.0 / 3.0))
    assert (data["min"], data["max"], data["range"]) == (1.0, 3.0, 2.0)


def test_stats_integer_type_truncates(client):
    r = client.post("/stats", json={"numbers": [1, 2, 3, 4], "type": "i32"})
    assert r.status_code == 200
    data = r.json()
    assert data["type"] == "i32"
    assert data["mean"] == 2
    assert data["range"] == 3


def test_stats_empty(client):
    r = client.post("/stats", json={"numbers": []})
    assert r.status_code == 400
    assert r.json()["detail"] == {"error": "EmptyCollection", "message": "collection is empty"}


def test_stats_count_does_not_fit(client):
    r = client.post("/stats", json={"numbers": [0] * 128, "type": "i8"})
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert detail["error"] == "CouldNotConvert"
    assert (detail["from"], detail["to"]) == ("Usize", "Item")


def test_stats_value_out_of_range(client):
    r = client.post("/stats", json={"numbers": [1, 300], "type": "u8"})
    assert r.status_code == 400


def test_stats_unknown_type(client):
    r = client.post("/stats", json={"numbers": [1], "type": "decimal"})
    assert r.status_code == 400


def test_stats_extra_field(client):
    r = client.post("/stats", json={"numbers": [1], "text": "nope"})
    assert r.status_code == 400


def test_frequency_stats(client):
    r = client.post("/frequency-stats", json={"pairs": [[1, 1], [2, 2]], "type": "f64"})
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 3
    assert data["sum"] == 5.0
    assert data["mean"] == pytest.approx(5.0 / 3.0)
    assert data["variance"] == pytest.approx(2.0 / 9.0)
    assert data["mode"] == 2.0


def test_frequency_stats_negative_count(client):
    r = client.post("/frequency-stats", json={"pairs": [[-1, 1]]})
    assert r.status_code == 400


def test_frequency_stats_empty(client):
    r = client.post("/frequency-stats", json={"pairs": [], "type": "i64"})
    assert r.status_code == 400
    assert r.json()["detail"]["error"] == "EmptyCollection"


def test_metrics(client):
    client.post("/stats", json={"numbers": []})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "numstats_request_total" in r.text
    assert 'numstats_stats_errors_total{error="EmptyCollection",type="f64"}' in r.text


def test_stats_overflow_is_reported_as_inf(client):
    r = client.post("/stats", json={"numbers": [1e308, 1e308]})
    assert r.status_code == 200
    data = r.json()
    assert data["sum"] == "inf"
    assert data["mean"] == "inf"
    assert data["min"] == 1e308
    assert data["range"] == 0.0


def test_stats_nan_is_reported_as_string(client):
    # NaN is not strict JSON, so the body is sent as raw text
    r = client.post(
        "/stats",
        content='{"numbers": [1.0, NaN, 3.0]}',
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["sum"] == "nan"
    assert data["mean"] == "nan"
    assert (data["min"], data["max"]) == (1.0, 3.0)


def test_frequency_stats_negative_infinity_mode(client):
    r = client.post(
        "/frequency-stats",
        content='{"pairs": [[3, -Infinity], [1, 2.0]]}',
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["mode"] == "-inf"
    assert data["min"] == "-inf"
