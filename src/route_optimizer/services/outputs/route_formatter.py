"""Serializers for optimized route outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ...models.domain import OptimizedRoute


def route_to_json(result: OptimizedRoute) -> dict:
    return {
        "order": list(result.order),
        "total_distance_km": result.total_distance_km,
        "total_time_minutes": result.total_time_minutes,
        "total_cost": result.total_cost,
        "refined": result.refined,
        "is_complete": result.is_complete,
        "unavailable_legs": [list(pair) for pair in result.unavailable_legs],
        "legs": [asdict(leg) for leg in result.legs],
    }


def route_to_csv(result: OptimizedRoute) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "from_id",
        "to_id",
        "distance_km",
        "duration_min",
        "cost",
        "available",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for sequence, leg in enumerate(result.legs, start=1):
        writer.writerow(
            {
                "sequence": sequence,
                "from_id": leg.from_id,
                "to_id": leg.to_id,
                "distance_km": leg.distance_km,
                "duration_min": leg.duration_min,
                "cost": leg.cost,
                "available": leg.available,
            }
        )
    return buffer.getvalue()
