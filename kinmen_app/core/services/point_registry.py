"""Service holding the connectable endpoints of a matching game."""

from __future__ import annotations

import logging

from kinmen_app.constants.matching_constants import DEFAULT_HIT_RADIUS
from kinmen_app.core.models import Endpoint, EndpointStatus, Point, Side, Term

logger = logging.getLogger(__name__)


class PointRegistry:
    """Owns every endpoint of the current game instance."""

    def __init__(self, hit_radius: float = DEFAULT_HIT_RADIUS) -> None:
        if hit_radius <= 0:
            raise ValueError("Hit radius must be positive.")
        self._hit_radius = hit_radius
        self._endpoints: dict[tuple[Side, int], Endpoint] = {}

    def initialize(self, left_terms: list[Term], right_terms: list[Term]) -> None:
        """Discard prior state and register one FREE endpoint per term."""
        self._endpoints = {}
        for side, terms in ((Side.LEFT, left_terms), (Side.RIGHT, right_terms)):
            for index, term in enumerate(terms):
                self._endpoints[(side, index)] = Endpoint(
                    side=side,
                    index=index,
                    value=term.value,
                    position=term.position,
                )

    def endpoints(self, side: Side | None = None) -> list[Endpoint]:
        items = self._endpoints.values()
        if side is not None:
            items = [endpoint for endpoint in items if endpoint.side is side]
        return sorted(items, key=_ordering_key)

    def get(self, side: Side, index: int) -> Endpoint | None:
        return self._endpoints.get((side, index))

    def contains(self, endpoint: Endpoint) -> bool:
        return self._endpoints.get(endpoint.key) is endpoint

    def find_at(self, point: Point) -> Endpoint | None:
        """Return the endpoint whose hit circle contains ``point``, nearest first."""
        best: Endpoint | None = None
        best_distance = 0.0
        for endpoint in self.endpoints():
            distance = endpoint.position.distance_to(point)
            if distance > self._hit_radius:
                continue
            if best is None or distance < best_distance:
                best = endpoint
                best_distance = distance
        return best

    def set_status(self, endpoint: Endpoint, status: EndpointStatus) -> None:
        if not self.contains(endpoint):
            logger.warning(
                "Ignoring status change to %s for untracked endpoint %s[%d]",
                status.name,
                endpoint.side.value,
                endpoint.index,
            )
            return
        endpoint.status = status

    def free_all(self) -> None:
        for endpoint in self._endpoints.values():
            endpoint.status = EndpointStatus.FREE

    def get_hit_radius(self) -> float:
        return self._hit_radius

    def __len__(self) -> int:
        return len(self._endpoints)


def _ordering_key(endpoint: Endpoint) -> tuple[int, int]:
    return (0 if endpoint.side is Side.LEFT else 1, endpoint.index)
