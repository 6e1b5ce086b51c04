"""Exceptions raised by the route optimization engine."""

from __future__ import annotations


class RoutingError(ValueError):
    """Base class for caller errors detected by the routing engine."""


class MissingBaseError(RoutingError):
    """Raised when no stop in the request is flagged as the base."""

    def __init__(self, message: str = "Base location not found: no stop is flagged as base.") -> None:
        super().__init__(message)


class InvalidTourError(RoutingError):
    """Raised when a tour handed to the refiner is not a closed loop."""
