"""Routing request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..models.domain import Stop


class StopModel(BaseModel):
    id: str = Field(..., min_length=1, description="Unique, stable stop identifier.")
    is_base: bool = False
    address: Optional[str] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)

    def to_domain(self) -> Stop:
        return Stop(
            stop_id=self.id,
            is_base=self.is_base,
            address=self.address,
            latitude=self.lat,
            longitude=self.lng,
        )


class MeasureModel(BaseModel):
    text: Optional[str] = None
    value: float = Field(..., ge=0)


class MatrixElementModel(BaseModel):
    distance: Optional[MeasureModel] = None
    duration: Optional[MeasureModel] = None
    status: str = "OK"


MatrixModel = Dict[str, Dict[str, MatrixElementModel]]


class OptimizeRequest(BaseModel):
    stops: List[StopModel]
    matrix: Optional[MatrixModel] = Field(
        default=None,
        description="Pairwise matrix keyed by origin then destination id. Simulated from coordinates when omitted.",
    )
    refine: Optional[bool] = Field(default=None, description="Run 2-opt after construction (server default if unset).")
    max_passes: Optional[int] = Field(default=None, ge=1)

    @field_validator("stops")
    @classmethod
    def _unique_ids(cls, value: List[StopModel]) -> List[StopModel]:
        seen: set[str] = set()
        for stop in value:
            if stop.id in seen:
                raise ValueError(f"Duplicate stop id '{stop.id}'.")
            seen.add(stop.id)
        return value


class RefineRequest(BaseModel):
    order: List[str] = Field(..., min_length=2)
    matrix: MatrixModel
    max_passes: Optional[int] = Field(default=None, ge=1)


class RouteLegModel(BaseModel):
    from_id: str
    to_id: str
    distance_km: float
    duration_min: float
    cost: float
    available: bool


class OptimizedRouteResponse(BaseModel):
    order: List[str]
    total_distance_km: float
    total_time_minutes: float
    total_cost: float
    refined: bool
    is_complete: bool
    unavailable_legs: List[List[str]]
    legs: List[RouteLegModel]
