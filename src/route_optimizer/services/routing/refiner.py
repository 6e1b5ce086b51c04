"""2-opt local search over a closed tour.

The base stays fixed at both ends; only interior positions are reordered.
The result is a local optimum under the 2-opt neighborhood, not a global
optimum.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...models.domain import CostMatrix, Tour
from .cost import tour_cost
from .errors import InvalidTourError

logger = logging.getLogger(__name__)


def _swap_2opt(route: Sequence[str], i: int, j: int) -> Tour:
    """Return a copy of ``route`` with ``route[i..j]`` reversed."""
    return [*route[:i], *reversed(route[i : j + 1]), *route[j + 1 :]]


def _validate_tour(tour: Sequence[str]) -> None:
    if len(tour) < 2:
        raise InvalidTourError("A tour needs at least the base at both ends.")
    if tour[0] != tour[-1]:
        raise InvalidTourError(
            f"A tour must start and end at the base (got '{tour[0]}' and '{tour[-1]}')."
        )


def refine_route(tour: Sequence[str], matrix: CostMatrix, *, max_passes: int | None = None) -> Tour:
    """Improve ``tour`` with 2-opt segment reversals until a pass finds nothing.

    Every pass scans all interior pairs ``i < j`` and accepts any candidate
    that is strictly cheaper than the current best, continuing the scan on the
    updated route. The loop ends after a pass with no accepted move or after
    ``max_passes`` passes (``settings.max_refinement_passes`` by default).
    """
    _validate_tour(tour)
    limit = max_passes if max_passes is not None else settings.max_refinement_passes
    if limit < 1:
        raise ValueError("max_passes must be at least 1.")

    best_route: Tour = list(tour)
    # fewer than two interior stops leaves nothing to reverse
    if len(best_route) < 4:
        return best_route

    best_cost = tour_cost(best_route, matrix)
    last = len(best_route) - 1
    passes = 0
    improved = True

    while improved:
        if passes >= limit:
            logger.warning(
                "2-opt stopped after %d passes without converging (cost %.3f)",
                passes,
                best_cost.total,
            )
            break
        improved = False
        passes += 1

        for i in range(1, last - 1):
            for j in range(i + 1, last):
                candidate = _swap_2opt(best_route, i, j)
                candidate_cost = tour_cost(candidate, matrix)
                if candidate_cost.improves_on(best_cost):
                    best_route = candidate
                    best_cost = candidate_cost
                    improved = True

    logger.debug("2-opt finished after %d passes with cost %.3f", passes, best_cost.total)
    return best_route
