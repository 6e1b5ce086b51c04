"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ...schemas.routing import OptimizedRouteResponse, OptimizeRequest, RefineRequest
from ...services.outputs.route_formatter import route_to_csv
from ...services.routing.service import optimize_stops, refine_order, run_optimization

router = APIRouter(prefix="/routes", tags=["routes"])
logger = logging.getLogger(__name__)


@router.post("/optimize", response_model=OptimizedRouteResponse, status_code=status.HTTP_200_OK)
def optimize(payload: OptimizeRequest) -> OptimizedRouteResponse:
    try:
        return optimize_stops(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}"
        ) from exc


@router.post("/optimize/csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def optimize_csv(payload: OptimizeRequest) -> PlainTextResponse:
    """Optimize and return one CSV row per leg of the final tour."""
    try:
        result = run_optimization(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error exporting route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export route: {str(exc)}"
        ) from exc
    return PlainTextResponse(route_to_csv(result), media_type="text/csv")


@router.post("/refine", response_model=OptimizedRouteResponse, status_code=status.HTTP_200_OK)
def refine(payload: RefineRequest) -> OptimizedRouteResponse:
    """Improve an existing tour with 2-opt without rebuilding it."""
    try:
        return refine_order(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error refining route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to refine route: {str(exc)}"
        ) from exc
