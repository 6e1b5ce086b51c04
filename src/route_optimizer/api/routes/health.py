"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/settings", status_code=status.HTTP_200_OK)
def health_settings() -> dict:
    """Expose the optimizer tuning currently in effect."""
    return {
        "max_refinement_passes": settings.max_refinement_passes,
        "refine_by_default": settings.refine_by_default,
        "simulation_average_speed_kmh": settings.simulation_average_speed_kmh,
        "simulation_traffic_factor": settings.simulation_traffic_factor,
    }
