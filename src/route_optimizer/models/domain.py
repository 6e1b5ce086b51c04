"""Domain models for stops, cost matrices and optimized routes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Mapping, Optional, Tuple


class EntryStatus(str, Enum):
    """Availability of a directed matrix entry."""

    OK = "OK"
    UNAVAILABLE = "UNAVAILABLE"

    @classmethod
    def parse(cls, value: object) -> "EntryStatus":
        """Map a provider status string onto OK/UNAVAILABLE."""

        if isinstance(value, EntryStatus):
            return value
        if isinstance(value, str) and value.strip().upper() == cls.OK.value:
            return cls.OK
        return cls.UNAVAILABLE


@dataclass(slots=True, frozen=True)
class Stop:
    """A location to visit. Exactly one stop per request is the base."""

    stop_id: str
    is_base: bool = False
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(slots=True, frozen=True)
class CostEntry:
    """Directed travel measurement between two stops."""

    distance_meters: float
    duration_seconds: float
    status: EntryStatus = EntryStatus.OK

    def __post_init__(self) -> None:
        if self.distance_meters < 0 or self.duration_seconds < 0:
            raise ValueError("Cost entries require non-negative distance and duration.")

    @property
    def is_ok(self) -> bool:
        return self.status is EntryStatus.OK

    @classmethod
    def unavailable(cls) -> "CostEntry":
        return cls(distance_meters=0.0, duration_seconds=0.0, status=EntryStatus.UNAVAILABLE)


# origin id -> destination id -> entry; may be sparse
CostMatrix = Mapping[str, Mapping[str, CostEntry]]
Tour = List[str]


@dataclass(slots=True)
class RouteLeg:
    from_id: str
    to_id: str
    distance_km: float
    duration_min: float
    cost: float
    available: bool


@dataclass(slots=True)
class OptimizedRoute:
    order: Tour
    total_distance_km: float
    total_time_minutes: float
    total_cost: float
    legs: List[RouteLeg] = field(default_factory=list)
    unavailable_legs: List[Tuple[str, str]] = field(default_factory=list)
    refined: bool = False

    @property
    def is_complete(self) -> bool:
        """False when at least one leg had no usable matrix entry."""
        return not self.unavailable_legs
