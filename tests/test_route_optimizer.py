import pytest

from route_optimizer.config import settings
from route_optimizer.models.domain import CostEntry, EntryStatus, Stop
from route_optimizer.services.routing import optimizer as optimizer_module
from route_optimizer.services.routing.errors import MissingBaseError
from route_optimizer.services.routing.optimizer import optimize_route, summarize_route


def _entry(weighted: float) -> CostEntry:
    return CostEntry(distance_meters=weighted * 1000, duration_seconds=weighted * 60)


def _full_matrix(ids: list[str]) -> dict:
    # cost grows with index distance so the best tour walks the ids in order
    return {
        a: {b: _entry(abs(i - j) + 1) for j, b in enumerate(ids) if b != a}
        for i, a in enumerate(ids)
    }


def test_missing_base_raises():
    stops = [Stop("A"), Stop("B"), Stop("C")]
    with pytest.raises(MissingBaseError):
        optimize_route(stops, _full_matrix(["A", "B", "C"]))


def test_missing_base_is_a_value_error():
    assert issubclass(MissingBaseError, ValueError)


@pytest.mark.parametrize("count", [0, 1, 2])
def test_degenerate_input_returns_identity_with_zero_totals(count: int):
    stops = [Stop("B", is_base=True), Stop("D1")][:count]

    result = optimize_route(stops, {})

    assert result.order == [stop.stop_id for stop in stops]
    assert result.total_distance_km == 0
    assert result.total_time_minutes == 0
    assert result.total_cost == 0
    assert result.legs == []


def test_result_is_a_closed_permutation():
    ids = ["HQ", "S1", "S2", "S3", "S4", "S5"]
    stops = [Stop("S3"), Stop("HQ", is_base=True), Stop("S1"), Stop("S5"), Stop("S2"), Stop("S4")]

    result = optimize_route(stops, _full_matrix(ids))

    assert result.order[0] == result.order[-1] == "HQ"
    assert len(result.order) == len(stops) + 1
    assert sorted(result.order[1:-1]) == sorted(ids[1:])
    assert result.is_complete


def test_two_delivery_scenario_totals():
    matrix = {
        "B": {"D1": _entry(1), "D2": _entry(5)},
        "D1": {"D2": _entry(1), "B": _entry(1)},
        "D2": {"D1": _entry(1), "B": _entry(5)},
    }
    stops = [Stop("B", is_base=True), Stop("D1"), Stop("D2")]

    result = optimize_route(stops, matrix, refine=True)

    assert result.order == ["B", "D1", "D2", "B"]
    assert result.total_cost == pytest.approx(7)
    assert result.total_distance_km == pytest.approx(7)
    assert result.total_time_minutes == pytest.approx(7)
    assert [leg.cost for leg in result.legs] == pytest.approx([1, 1, 5])


def test_refine_flag_selects_construction_only(monkeypatch: pytest.MonkeyPatch):
    calls = []

    def fake_refine(order, matrix, *, max_passes=None):
        calls.append(max_passes)
        return order

    monkeypatch.setattr(optimizer_module, "refine_route", fake_refine)
    stops = [Stop("B", is_base=True), Stop("D1"), Stop("D2")]
    matrix = _full_matrix(["B", "D1", "D2"])

    construct_only = optimize_route(stops, matrix, refine=False)
    refined = optimize_route(stops, matrix, refine=True, max_passes=5)

    assert calls == [5]
    assert construct_only.refined is False
    assert refined.refined is True


def test_refine_defaults_to_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "refine_by_default", False)
    stops = [Stop("B", is_base=True), Stop("D1"), Stop("D2")]

    result = optimize_route(stops, _full_matrix(["B", "D1", "D2"]))

    assert result.refined is False


def test_refinement_beats_construction_on_crossing_fixture():
    def sym(costs):
        matrix: dict = {}
        for (a, b), value in costs.items():
            matrix.setdefault(a, {})[b] = _entry(value)
            matrix.setdefault(b, {})[a] = _entry(value)
        return matrix

    matrix = sym(
        {
            ("O", "A"): 1,
            ("O", "B"): 3,
            ("O", "C"): 2,
            ("A", "B"): 1,
            ("A", "C"): 2,
            ("B", "C"): 10,
        }
    )
    stops = [Stop("O", is_base=True), Stop("A"), Stop("B"), Stop("C")]

    constructed = optimize_route(stops, matrix, refine=False)
    refined = optimize_route(stops, matrix, refine=True)

    assert constructed.total_cost == pytest.approx(14)
    assert refined.total_cost == pytest.approx(8)


def test_unavailable_legs_add_nothing_and_are_reported():
    matrix = {
        "B": {"D1": _entry(2), "D2": _entry(4)},
        "D1": {"D2": CostEntry(0, 0, EntryStatus.UNAVAILABLE), "B": _entry(2)},
        "D2": {"B": _entry(4)},
    }

    result = summarize_route(["B", "D1", "D2", "B"], matrix)

    assert result.unavailable_legs == [("D1", "D2")]
    assert not result.is_complete
    assert result.total_cost == pytest.approx(6)
    assert result.total_distance_km == pytest.approx(6)
    assert result.legs[1].available is False


def test_second_base_flag_is_visited_as_delivery():
    ids = ["B1", "B2", "D1"]
    stops = [Stop("B1", is_base=True), Stop("B2", is_base=True), Stop("D1")]

    result = optimize_route(stops, _full_matrix(ids))

    assert result.order[0] == result.order[-1] == "B1"
    assert sorted(result.order[1:-1]) == ["B2", "D1"]


def test_stops_are_left_untouched():
    stops = [Stop("B", is_base=True), Stop("D2"), Stop("D1")]
    snapshot = list(stops)
    optimize_route(stops, _full_matrix(["B", "D1", "D2"]))
    assert stops == snapshot
