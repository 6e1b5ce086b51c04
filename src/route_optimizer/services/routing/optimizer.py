"""Route optimization orchestration: validate, construct, refine, aggregate."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...models.domain import CostMatrix, OptimizedRoute, RouteLeg, Stop
from .constructor import construct_route
from .cost import lookup_entry, weighted_cost
from .errors import MissingBaseError
from .refiner import refine_route

logger = logging.getLogger(__name__)


def _split_stops(stops: Sequence[Stop]) -> tuple[Stop, list[Stop]]:
    base: Stop | None = None
    deliveries: list[Stop] = []
    for stop in stops:
        if stop.is_base and base is None:
            base = stop
            continue
        if stop.is_base:
            logger.warning(
                "Stop '%s' is also flagged as base; visiting it as a delivery (base is '%s')",
                stop.stop_id,
                base.stop_id,
            )
        deliveries.append(stop)
    if base is None:
        raise MissingBaseError()
    return base, deliveries


def summarize_route(order: Sequence[str], matrix: CostMatrix, *, refined: bool = False) -> OptimizedRoute:
    """Aggregate distance, time and cost over consecutive pairs of ``order``.

    Legs without an OK matrix entry add nothing to the totals and are listed
    in ``unavailable_legs`` instead, so callers can tell a cheap tour from an
    incomplete one.
    """
    legs: list[RouteLeg] = []
    unavailable: list[tuple[str, str]] = []
    total_distance = 0.0
    total_time = 0.0
    total_cost = 0.0

    for from_id, to_id in zip(order, order[1:]):
        entry = lookup_entry(from_id, to_id, matrix)
        if entry is None or not entry.is_ok:
            unavailable.append((from_id, to_id))
            legs.append(RouteLeg(from_id, to_id, 0.0, 0.0, 0.0, available=False))
            continue
        distance_km = entry.distance_meters / 1000.0
        duration_min = entry.duration_seconds / 60.0
        step_cost = weighted_cost(entry)
        total_distance += distance_km
        total_time += duration_min
        total_cost += step_cost
        legs.append(RouteLeg(from_id, to_id, distance_km, duration_min, step_cost, available=True))

    if unavailable:
        logger.warning("%d leg(s) have no usable matrix entry: %s", len(unavailable), unavailable)

    return OptimizedRoute(
        order=list(order),
        total_distance_km=total_distance,
        total_time_minutes=total_time,
        total_cost=total_cost,
        legs=legs,
        unavailable_legs=unavailable,
        refined=refined,
    )


def optimize_route(
    stops: Sequence[Stop],
    matrix: CostMatrix,
    *,
    refine: bool | None = None,
    max_passes: int | None = None,
) -> OptimizedRoute:
    """Order ``stops`` into a closed tour from the base and back.

    Two stops or fewer need no ordering: the ids come back unchanged with
    zero totals. Otherwise the tour is built with nearest-neighbor and, when
    ``refine`` is true (``settings.refine_by_default`` if omitted), improved
    with 2-opt. The result is heuristic, not guaranteed optimal.

    Raises:
        MissingBaseError: no stop is flagged as base.
    """
    if len(stops) <= 2:
        return OptimizedRoute(
            order=[stop.stop_id for stop in stops],
            total_distance_km=0.0,
            total_time_minutes=0.0,
            total_cost=0.0,
        )

    base, deliveries = _split_stops(stops)
    should_refine = settings.refine_by_default if refine is None else refine

    order = construct_route(base, deliveries, matrix)
    if should_refine:
        order = refine_route(order, matrix, max_passes=max_passes)

    result = summarize_route(order, matrix, refined=should_refine)
    logger.info(
        "Optimized route from '%s' over %d deliveries: %.2f km, %.1f min, cost %.3f",
        base.stop_id,
        len(deliveries),
        result.total_distance_km,
        result.total_time_minutes,
        result.total_cost,
    )
    return result
