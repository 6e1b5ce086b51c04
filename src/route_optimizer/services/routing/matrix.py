"""Builders that turn provider payloads into a ``CostMatrix``.

The engine never calls a mapping provider itself; these helpers only reshape
data a caller already fetched, or simulate a matrix from stop coordinates
when no provider data is available.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ...config import settings
from ...models.domain import CostEntry, EntryStatus, Stop
from ..geospatial import haversine_km

logger = logging.getLogger(__name__)


def _measure(element: Mapping[str, Any], key: str) -> float | None:
    raw = element.get(key)
    if isinstance(raw, Mapping):
        raw = raw.get("value")
    if raw is None:
        return None
    return float(raw)


def entry_from_element(element: Mapping[str, Any] | None) -> CostEntry:
    """Parse ``{"distance": {"value": m}, "duration": {"value": s}, "status": "OK"}``.

    Elements that are missing, not OK, or lack either measurement become
    unavailable entries.
    """
    if not element:
        return CostEntry.unavailable()
    status = EntryStatus.parse(element.get("status", EntryStatus.OK.value))
    distance = _measure(element, "distance")
    duration = _measure(element, "duration")
    if status is not EntryStatus.OK or distance is None or duration is None:
        return CostEntry.unavailable()
    return CostEntry(distance_meters=distance, duration_seconds=duration, status=EntryStatus.OK)


def matrix_from_elements(rows: Mapping[str, Mapping[str, Mapping[str, Any] | None]]) -> dict[str, dict[str, CostEntry]]:
    """Convert nested provider elements keyed by origin then destination id."""

    return {
        from_id: {to_id: entry_from_element(element) for to_id, element in row.items()}
        for from_id, row in rows.items()
    }


def matrix_from_table(stop_ids: Sequence[str], table: Mapping[str, Any]) -> dict[str, dict[str, CostEntry]]:
    """Convert an OSRM-style ``durations``/``distances`` table.

    Row and column ``k`` belong to ``stop_ids[k]``; ``None`` cells are
    unreachable pairs.
    """
    durations = table.get("durations")
    distances = table.get("distances")
    if durations is None or distances is None:
        raise ValueError("Distance table is missing durations or distances.")
    size = len(stop_ids)
    if len(durations) != size or len(distances) != size:
        raise ValueError(
            f"Matrix size mismatch: stops={size}, durations={len(durations)}, distances={len(distances)}"
        )

    matrix: dict[str, dict[str, CostEntry]] = {}
    for i, from_id in enumerate(stop_ids):
        if len(durations[i]) != size or len(distances[i]) != size:
            raise ValueError(f"Row {i} of the distance table does not have {size} columns.")
        row: dict[str, CostEntry] = {}
        for j, to_id in enumerate(stop_ids):
            duration = durations[i][j]
            distance = distances[i][j]
            if duration is None or distance is None:
                row[to_id] = CostEntry.unavailable()
            else:
                row[to_id] = CostEntry(distance_meters=float(distance), duration_seconds=float(duration))
        matrix[from_id] = row
    return matrix


def simulate_matrix(
    stops: Sequence[Stop],
    *,
    average_speed_kmh: float | None = None,
    traffic_factor: float | None = None,
) -> dict[str, dict[str, CostEntry]]:
    """Estimate a matrix from straight-line distance between stop coordinates.

    Durations assume ``average_speed_kmh`` slowed by ``traffic_factor``.
    Pairs involving a stop without coordinates are unavailable; a stop to
    itself is always a zero-cost OK entry.
    """
    speed = average_speed_kmh if average_speed_kmh is not None else settings.simulation_average_speed_kmh
    factor = traffic_factor if traffic_factor is not None else settings.simulation_traffic_factor
    if speed <= 0:
        raise ValueError("average_speed_kmh must be positive.")

    missing = [stop.stop_id for stop in stops if not stop.has_coordinates]
    if missing:
        logger.warning("Stops without coordinates cannot be simulated: %s", missing)

    matrix: dict[str, dict[str, CostEntry]] = {}
    for origin in stops:
        row: dict[str, CostEntry] = {}
        for destination in stops:
            if origin.stop_id == destination.stop_id:
                row[destination.stop_id] = CostEntry(distance_meters=0.0, duration_seconds=0.0)
            elif not origin.has_coordinates or not destination.has_coordinates:
                row[destination.stop_id] = CostEntry.unavailable()
            else:
                distance_km = haversine_km(
                    origin.latitude, origin.longitude, destination.latitude, destination.longitude
                )
                duration_seconds = (distance_km / speed) * 3600.0 * factor
                row[destination.stop_id] = CostEntry(
                    distance_meters=distance_km * 1000.0,
                    duration_seconds=duration_seconds,
                )
        matrix[origin.stop_id] = row
    logger.info("Simulated distance matrix for %d stops", len(stops))
    return matrix
