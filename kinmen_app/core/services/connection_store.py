"""Service storing committed connections and checking them against the answer key."""

from __future__ import annotations

from kinmen_app.core.models import (
    AnswerKey,
    Connection,
    ConnectionState,
    Endpoint,
    EndpointStatus,
    ValidationResult,
)
from kinmen_app.core.services.point_registry import PointRegistry


class ConnectionStore:
    """Holds committed connections in commit order."""

    def __init__(self, registry: PointRegistry) -> None:
        self._registry = registry
        self._connections: list[Connection] = []

    def add(self, connection: Connection) -> None:
        if self.is_connected(connection.left) or self.is_connected(connection.right):
            raise ValueError("Endpoint already participates in a connection.")
        self._connections.append(connection)

    def connections(self) -> list[Connection]:
        return list(self._connections)

    def is_connected(self, endpoint: Endpoint) -> bool:
        return any(
            connection.left is endpoint or connection.right is endpoint
            for connection in self._connections
        )

    def validate_all(self, answer_key: AnswerKey) -> ValidationResult:
        """Tag every connection CORRECT or INCORRECT and count the correct ones.

        ``total`` is the number of expected pairs, so unanswered pairs count
        against the player.
        """
        correct_count = 0
        for connection in self._connections:
            is_correct = connection.value_pair in answer_key
            if is_correct:
                correct_count += 1
                connection.state = ConnectionState.CORRECT
                endpoint_status = EndpointStatus.CORRECT
            else:
                connection.state = ConnectionState.INCORRECT
                endpoint_status = EndpointStatus.INCORRECT
            self._registry.set_status(connection.left, endpoint_status)
            self._registry.set_status(connection.right, endpoint_status)
        return ValidationResult(correct_count=correct_count, total=len(answer_key))

    def reset(self) -> None:
        """Drop every connection and free the endpoints they referenced."""
        for connection in self._connections:
            self._registry.set_status(connection.left, EndpointStatus.FREE)
            self._registry.set_status(connection.right, EndpointStatus.FREE)
        self._connections = []

    def __len__(self) -> int:
        return len(self._connections)
