"""Fire-and-forget recording of game results into the progress store."""

from __future__ import annotations

import logging
from threading import Thread

from kinmen_app.constants.matching_constants import MATCHING_GAME_TYPE
from kinmen_app.core.models import ValidationResult
from kinmen_app.core.progress_manager import ProgressManager

logger = logging.getLogger(__name__)


class ProgressSync:
    """Pushes finished matching rounds to the progress manager off the UI thread.

    Callers never wait on the result; failures are logged and dropped.
    """

    def __init__(self, progress_manager: ProgressManager, username: str, run_in_thread: bool = True) -> None:
        self._progress_manager = progress_manager
        self._username = username
        self._run_in_thread = run_in_thread

    def set_username(self, username: str) -> None:
        self._username = username

    def record_matching_result(self, result: ValidationResult) -> Thread | None:
        if self._run_in_thread:
            thread = Thread(
                target=self._record,
                args=(self._username, result.score_percent),
                name="ProgressSync",
                daemon=True,
            )
            thread.start()
            return thread
        self._record(self._username, result.score_percent)
        return None

    def _record(self, username: str, score: int) -> None:
        try:
            self._progress_manager.record_game_played(username, MATCHING_GAME_TYPE, score)
        except Exception:
            logger.exception("Could not record matching result for %s", username)
        else:
            logger.info("Recorded matching score %d for %s", score, username)
