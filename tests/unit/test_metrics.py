from prometheus_client import REGISTRY

from numstats.observability.metrics import observe_request, record_stats_error, route_path


def _sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_route_path_prefers_template():
    class Route:
        path = "/stats"

    assert route_path({"route": Route(), "path": "/stats/"}) == "/stats"
    assert route_path({"path": "/missing"}) == "/missing"


def test_observe_request_counts_errors_separately():
    labels = {"path": "/unit-metrics", "method": "POST"}
    before_ok = _sample("numstats_request_total", status="200", **labels)
    before_err = _sample("numstats_request_errors_total", status="400", **labels)

    observe_request("/unit-metrics", "POST", 200, 0.01)
    observe_request("/unit-metrics", "POST", 400, 0.02)

    assert _sample("numstats_request_total", status="200", **labels) == before_ok + 1
    assert _sample("numstats_request_errors_total", status="400", **labels) == before_err + 1
    assert _sample("numstats_request_errors_total", status="200", **labels) == 0.0
    assert _sample("numstats_request_duration_seconds_count", **labels) >= 2


def test_record_stats_error():
    before = _sample("numstats_stats_errors_total", error="CouldNotConvert", type="u128")
    record_stats_error("CouldNotConvert", "u128")
    assert _sample("numstats_stats_errors_total", error="CouldNotConvert", type="u128") == before + 1
