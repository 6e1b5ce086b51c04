from route_optimizer.config import Settings
from route_optimizer.models.domain import CostEntry
from route_optimizer.services.outputs.route_formatter import route_to_csv, route_to_json
from route_optimizer.services.routing.optimizer import summarize_route


def _result():
    matrix = {
        "B": {"D1": CostEntry(distance_meters=2000, duration_seconds=120)},
        "D1": {},
    }
    return summarize_route(["B", "D1", "B"], matrix)


def test_route_to_json_includes_legs_and_completeness():
    payload = route_to_json(_result())

    assert payload["order"] == ["B", "D1", "B"]
    assert payload["is_complete"] is False
    assert payload["unavailable_legs"] == [["D1", "B"]]
    assert payload["legs"][0]["distance_km"] == 2.0
    assert payload["legs"][1]["available"] is False


def test_route_to_csv_writes_one_row_per_leg():
    content = route_to_csv(_result())
    lines = content.strip().splitlines()

    assert lines[0] == "sequence,from_id,to_id,distance_km,duration_min,cost,available"
    assert len(lines) == 3
    assert lines[2].startswith("2,D1,B,")


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("ROUTE_OPTIMIZER_MAX_REFINEMENT_PASSES", "7")
    monkeypatch.setenv("ROUTE_OPTIMIZER_FRONTEND_ALLOWED_ORIGINS", '["http://a.test", "http://b.test"]')
    monkeypatch.setenv("ROUTE_OPTIMIZER_LOG_LEVEL", "debug")

    configured = Settings()

    assert configured.max_refinement_passes == 7
    assert configured.frontend_allowed_origins == ("http://a.test", "http://b.test")
    assert configured.log_level == "DEBUG"
