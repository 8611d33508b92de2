"""Pointer-drag state machine that turns drags into committed connections."""

from __future__ import annotations

import logging
from typing import Callable

from kinmen_app.core.models import (
    Connection,
    DragSession,
    Endpoint,
    EndpointStatus,
    LineGeometry,
    Point,
    Side,
)
from kinmen_app.core.services.connection_store import ConnectionStore
from kinmen_app.core.services.point_registry import PointRegistry

logger = logging.getLogger(__name__)


class DragSessionController:
    """Manages the IDLE -> DRAGGING -> IDLE lifecycle of a single pointer.

    Every transition runs to completion synchronously. Only one drag session
    exists at a time; events from any other pointer are ignored while a drag
    is in progress.
    """

    def __init__(
        self,
        registry: PointRegistry,
        store: ConnectionStore,
        on_commit: Callable[[Connection], None] | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._on_commit = on_commit
        self._session: DragSession | None = None

    def is_dragging(self) -> bool:
        return self._session is not None

    def session(self) -> DragSession | None:
        return self._session

    def pointer_down(self, point: Point, pointer_id: int = 0) -> bool:
        """Start a drag when ``point`` lands on a FREE endpoint.

        Returns True when a new session was created.
        """
        if self._session is not None:
            return False
        origin = self._registry.find_at(point)
        if origin is None or not origin.is_free():
            return False
        self._registry.set_status(origin, EndpointStatus.ACTIVE)
        self._session = DragSession(
            origin=origin,
            pointer=point,
            line=LineGeometry(start=origin.position, end=point),
            pointer_id=pointer_id,
        )
        return True

    def pointer_move(self, point: Point, pointer_id: int = 0) -> bool:
        session = self._session
        if session is None or session.pointer_id != pointer_id:
            return False
        session.pointer = point
        session.line.end = point
        return True

    def pointer_up(self, point: Point, pointer_id: int = 0) -> Connection | None:
        """Finish the drag, committing a connection when the target is valid."""
        session = self._session
        if session is None or session.pointer_id != pointer_id:
            return None

        self._session = None
        origin = session.origin
        target = self._registry.find_at(point)
        if not self._is_valid_target(origin, target):
            self._registry.set_status(origin, EndpointStatus.FREE)
            return None

        left, right = (origin, target) if origin.side is Side.LEFT else (target, origin)
        connection = Connection(
            left=left,
            right=right,
            line=LineGeometry(start=origin.position, end=target.position),
        )
        self._store.add(connection)
        self._registry.set_status(origin, EndpointStatus.CONNECTED)
        self._registry.set_status(target, EndpointStatus.CONNECTED)
        logger.debug("Connected %r -> %r", left.value, right.value)

        if self._on_commit is not None:
            self._on_commit(connection)
        return connection

    def cancel(self) -> None:
        """Discard any in-progress drag and free its origin."""
        session = self._session
        self._session = None
        if session is not None and session.origin.status is EndpointStatus.ACTIVE:
            self._registry.set_status(session.origin, EndpointStatus.FREE)

    def reset(self) -> None:
        """Cancel the drag and remove every committed connection."""
        self.cancel()
        self._store.reset()
        self._registry.free_all()

    @staticmethod
    def _is_valid_target(origin: Endpoint, target: Endpoint | None) -> bool:
        if target is None or target is origin:
            return False
        return target.side is origin.side.opposite and target.is_free()
