"""Edge and tour cost model.

An edge cost blends distance (km) and travel time (minutes) with fixed
weights. Time dominates because travel time under traffic is the scarcer
resource. Pairs without a usable matrix entry are *unavailable*: the scalar
``cost`` reports them as ``math.inf`` while the search works on the tagged
``EdgeCost``/``TourCost`` values so infinities never leak into sums.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ...models.domain import CostEntry, CostMatrix

DISTANCE_WEIGHT = 0.3
TIME_WEIGHT = 0.7
# reorderings of equal tours can differ by float rounding only
COST_TOLERANCE = 1e-9


@dataclass(slots=True, frozen=True, order=True)
class EdgeCost:
    """Tagged edge cost. Available edges always sort before unavailable ones."""

    unavailable: bool
    value: float

    @classmethod
    def ok(cls, value: float) -> "EdgeCost":
        return cls(unavailable=False, value=value)

    @classmethod
    def missing(cls) -> "EdgeCost":
        return cls(unavailable=True, value=0.0)

    @property
    def scalar(self) -> float:
        return math.inf if self.unavailable else self.value


@dataclass(slots=True, frozen=True)
class TourCost:
    """Aggregate of edge costs, ranked by unavailable legs first, then finite cost."""

    unavailable_legs: int
    finite_cost: float

    @property
    def total(self) -> float:
        return math.inf if self.unavailable_legs else self.finite_cost

    def improves_on(self, other: "TourCost", tolerance: float = COST_TOLERANCE) -> bool:
        """True when strictly cheaper than ``other`` beyond float noise."""
        if self.unavailable_legs != other.unavailable_legs:
            return self.unavailable_legs < other.unavailable_legs
        return self.finite_cost < other.finite_cost - tolerance


def lookup_entry(from_id: str, to_id: str, matrix: CostMatrix) -> CostEntry | None:
    """Return the directed entry for ``from_id -> to_id`` or ``None`` when absent."""

    row = matrix.get(from_id)
    if row is None:
        return None
    return row.get(to_id)


def weighted_cost(entry: CostEntry) -> float:
    distance_km = entry.distance_meters / 1000.0
    duration_min = entry.duration_seconds / 60.0
    return DISTANCE_WEIGHT * distance_km + TIME_WEIGHT * duration_min


def edge_cost(from_id: str, to_id: str, matrix: CostMatrix) -> EdgeCost:
    entry = lookup_entry(from_id, to_id, matrix)
    if entry is None or not entry.is_ok:
        return EdgeCost.missing()
    return EdgeCost.ok(weighted_cost(entry))


def cost(from_id: str, to_id: str, matrix: CostMatrix) -> float:
    """Scalar edge cost; ``math.inf`` when the pair is absent or not OK."""

    return edge_cost(from_id, to_id, matrix).scalar


def tour_cost(tour: Sequence[str], matrix: CostMatrix) -> TourCost:
    unavailable = 0
    finite = 0.0
    for from_id, to_id in zip(tour, tour[1:]):
        step = edge_cost(from_id, to_id, matrix)
        if step.unavailable:
            unavailable += 1
        else:
            finite += step.value
    return TourCost(unavailable_legs=unavailable, finite_cost=finite)
