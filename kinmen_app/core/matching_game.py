"""Facade tying the matching-game services together for the UI layer."""

from __future__ import annotations

import logging
from typing import Callable

from kinmen_app.constants.matching_constants import DEFAULT_HIT_RADIUS
from kinmen_app.core.models import (
    AnswerKey,
    Connection,
    DragSession,
    Endpoint,
    MatchingContent,
    Point,
    Side,
    ValidationResult,
)
from kinmen_app.core.services.connection_store import ConnectionStore
from kinmen_app.core.services.drag_controller import DragSessionController
from kinmen_app.core.services.feedback_reporter import FeedbackReporter, LoggingFeedbackReporter
from kinmen_app.core.services.point_registry import PointRegistry

logger = logging.getLogger(__name__)


class MatchingSetupError(ValueError):
    """Raised when matching content cannot produce a playable game."""


class MatchingGame:
    """Drag-to-connect matching game: registry, drag controller, store and reporter.

    Subscribers register plain callables on the hook lists:

    * ``on_connection_committed(connection)`` after every successful drag
    * ``on_validated(result)`` after ``check_answers``
    * ``on_reset()`` after the board is cleared
    * ``on_changed()`` whenever anything a renderer draws has changed
    """

    def __init__(
        self,
        reporter: FeedbackReporter | None = None,
        hit_radius: float = DEFAULT_HIT_RADIUS,
    ) -> None:
        self._registry = PointRegistry(hit_radius=hit_radius)
        self._store = ConnectionStore(self._registry)
        self._controller = DragSessionController(
            self._registry, self._store, on_commit=self._handle_commit
        )
        self._reporter = reporter or LoggingFeedbackReporter()
        self._answer_key: AnswerKey | None = None
        self._active = False

        self.on_connection_committed: list[Callable[[Connection], None]] = []
        self.on_validated: list[Callable[[ValidationResult], None]] = []
        self.on_reset: list[Callable[[], None]] = []
        self.on_changed: list[Callable[[], None]] = []

    # --- Lifecycle ---

    def load_content(self, content: MatchingContent) -> None:
        """Reset the board and set up a new game instance from ``content``."""
        _validate_content(content)
        self._controller.reset()
        self._registry.initialize(content.left_terms, content.right_terms)
        self._answer_key = content.answer_key
        self._active = True
        logger.info(
            "Matching game ready: %d left, %d right, %d expected pairs",
            len(content.left_terms),
            len(content.right_terms),
            len(content.answer_key),
        )
        self._emit(self.on_changed)

    def destroy(self) -> None:
        """Tear the game down; pointer input is ignored until content is loaded again."""
        self._active = False
        self._controller.reset()
        self._registry.initialize([], [])
        self._answer_key = None
        self._emit(self.on_changed)

    def is_active(self) -> bool:
        return self._active

    # --- Pointer input ---

    def pointer_down(self, point: Point, pointer_id: int = 0) -> bool:
        if not self._active:
            return False
        started = self._controller.pointer_down(point, pointer_id)
        if started:
            self._emit(self.on_changed)
        return started

    def pointer_move(self, point: Point, pointer_id: int = 0) -> None:
        if self._controller.pointer_move(point, pointer_id):
            self._emit(self.on_changed)

    def pointer_up(self, point: Point, pointer_id: int = 0) -> Connection | None:
        session = self._controller.session()
        if session is None:
            return None
        connection = self._controller.pointer_up(point, pointer_id)
        # Releases from another pointer leave the session in place.
        if self._controller.session() is not session:
            self._emit(self.on_changed)
        return connection

    # --- Answers ---

    def check_answers(self) -> ValidationResult:
        if self._answer_key is None:
            raise RuntimeError("No matching content loaded.")
        result = self._store.validate_all(self._answer_key)
        logger.info("Matching result: %d / %d", result.correct_count, result.total)
        try:
            self._reporter.report(result)
        except Exception:
            logger.exception("Feedback reporter failed")
        self._emit(self.on_validated, result)
        self._emit(self.on_changed)
        return result

    def reset(self) -> None:
        self._controller.reset()
        self._emit(self.on_reset)
        self._emit(self.on_changed)

    # --- Read access for renderers ---

    def get_endpoints(self, side: Side | None = None) -> list[Endpoint]:
        return self._registry.endpoints(side)

    def get_connections(self) -> list[Connection]:
        return self._store.connections()

    def get_drag_session(self) -> DragSession | None:
        return self._controller.session()

    def is_dragging(self) -> bool:
        return self._controller.is_dragging()

    def get_answer_key(self) -> AnswerKey | None:
        return self._answer_key

    def set_reporter(self, reporter: FeedbackReporter) -> None:
        self._reporter = reporter

    # --- Internal ---

    def _handle_commit(self, connection: Connection) -> None:
        self._emit(self.on_connection_committed, connection)

    @staticmethod
    def _emit(hooks: list[Callable], *args) -> None:
        for hook in list(hooks):
            try:
                hook(*args)
            except Exception:
                logger.exception("Matching game hook %r failed", hook)


def _validate_content(content: MatchingContent) -> None:
    if not content.left_terms:
        raise MatchingSetupError("Matching content has no left-side terms.")
    if not content.right_terms:
        raise MatchingSetupError("Matching content has no right-side terms.")
    if len(content.answer_key) == 0:
        raise MatchingSetupError("Matching content has an empty answer key.")

    left_values = {term.value for term in content.left_terms}
    right_values = {term.value for term in content.right_terms}
    for left, right in sorted(content.answer_key.pairs):
        if left not in left_values:
            raise MatchingSetupError(f"Answer key references unknown left term '{left}'.")
        if right not in right_values:
            raise MatchingSetupError(f"Answer key references unknown right term '{right}'.")
