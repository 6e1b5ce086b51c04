"""Nearest-neighbor tour construction."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import CostMatrix, Stop, Tour
from .cost import EdgeCost, edge_cost

logger = logging.getLogger(__name__)


def construct_route(base: Stop, deliveries: Sequence[Stop], matrix: CostMatrix) -> Tour:
    """Build a closed tour by always stepping to the cheapest unvisited stop.

    Ties keep the first candidate in ``deliveries`` order, and when every
    remaining candidate is unreachable from the current stop the first one is
    taken, so construction always completes.
    """
    if not deliveries:
        raise ValueError("At least one delivery stop is required to build a route.")
    if any(stop.stop_id == base.stop_id for stop in deliveries):
        raise ValueError(f"Base '{base.stop_id}' must not appear among the deliveries.")

    unvisited = list(deliveries)
    route: Tour = [base.stop_id]
    current = base

    while unvisited:
        nearest_index = 0
        best: EdgeCost | None = None
        for index, candidate in enumerate(unvisited):
            step = edge_cost(current.stop_id, candidate.stop_id, matrix)
            if best is None or step < best:
                best = step
                nearest_index = index

        if best is not None and best.unavailable:
            logger.debug(
                "No reachable candidate from %s; falling back to %s",
                current.stop_id,
                unvisited[nearest_index].stop_id,
            )

        current = unvisited.pop(nearest_index)
        route.append(current.stop_id)

    route.append(base.stop_id)
    return route
