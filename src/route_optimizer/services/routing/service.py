"""Routing orchestration service bridging API payloads and the engine."""

from __future__ import annotations

import logging

from ...models.domain import CostMatrix, OptimizedRoute
from ...schemas.routing import MatrixModel, OptimizedRouteResponse, OptimizeRequest, RefineRequest
from ..outputs.route_formatter import route_to_json
from .matrix import matrix_from_elements, simulate_matrix
from .optimizer import optimize_route, summarize_route
from .refiner import refine_route

logger = logging.getLogger(__name__)


def _to_cost_matrix(matrix: MatrixModel) -> CostMatrix:
    rows = {
        from_id: {to_id: element.model_dump() for to_id, element in row.items()}
        for from_id, row in matrix.items()
    }
    return matrix_from_elements(rows)


def _to_response(result: OptimizedRoute) -> OptimizedRouteResponse:
    return OptimizedRouteResponse(**route_to_json(result))


def run_optimization(payload: OptimizeRequest) -> OptimizedRoute:
    stops = [stop.to_domain() for stop in payload.stops]
    if payload.matrix is None:
        logger.info("No distance matrix supplied for %d stops, using simulation", len(stops))
        matrix = simulate_matrix(stops)
    else:
        matrix = _to_cost_matrix(payload.matrix)
    return optimize_route(stops, matrix, refine=payload.refine, max_passes=payload.max_passes)


def optimize_stops(payload: OptimizeRequest) -> OptimizedRouteResponse:
    return _to_response(run_optimization(payload))


def refine_order(payload: RefineRequest) -> OptimizedRouteResponse:
    """Run 2-opt on a caller-supplied tour and re-score it."""
    matrix = _to_cost_matrix(payload.matrix)
    order = refine_route(payload.order, matrix, max_passes=payload.max_passes)
    return _to_response(summarize_route(order, matrix, refined=True))
