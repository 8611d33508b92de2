"""Business logic for progress, classes and analytics shared between UI and API."""

from __future__ import annotations

from threading import Lock
from typing import Any

from kinmen_app.core.services.analytics import build_class_analytics
from kinmen_app.core.services.class_service import ClassService
from kinmen_app.core.services.document_store import DocumentStore, progress_key
from kinmen_app.core.services.progress_service import ProgressService


class ProgressManager:
    """Facade for the document store and the services built on it."""

    def __init__(self, store: DocumentStore | None = None) -> None:
        self._lock = Lock()
        self._store = store or DocumentStore()
        self._progress = ProgressService(self._store)
        self._classes = ClassService(self._store)

    # --- Progress ---

    def create_student(self, username: str) -> dict[str, Any]:
        with self._lock:
            return self._progress.create_student(username)

    def ensure_student(self, username: str) -> dict[str, Any]:
        with self._lock:
            if self._progress.has_student(username):
                return self._progress.get_progress(username)
            return self._progress.create_student(username)

    def get_progress(self, username: str) -> dict[str, Any]:
        with self._lock:
            return self._progress.get_progress(username)

    def update_progress(
        self,
        username: str,
        vocabulary: dict[str, Any] | None = None,
        dialogue: dict[str, Any] | None = None,
        practice: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        with self._lock:
            return self._progress.update_progress(
                username, vocabulary=vocabulary, dialogue=dialogue, practice=practice
            )

    def record_game_played(self, username: str, game_type: str, score: int = 0) -> dict[str, Any]:
        with self._lock:
            return self._progress.record_game_played(username, game_type, score)

    def record_vocabulary_learned(self, username: str, vocab_id: int) -> dict[str, Any]:
        with self._lock:
            return self._progress.record_vocabulary_learned(username, vocab_id)

    # --- Classes ---

    def create_class(self, teacher_username: str, class_name: str) -> dict[str, Any]:
        with self._lock:
            return self._classes.create_class(teacher_username, class_name)

    def join_class(self, username: str, invite_code: str) -> dict[str, Any]:
        with self._lock:
            return self._classes.join_class(username, invite_code)

    def list_class_students(self, class_id: str) -> dict[str, Any]:
        with self._lock:
            return self._classes.list_class_students(class_id)

    def student_detail(self, username: str) -> dict[str, Any]:
        with self._lock:
            return self._classes.student_detail(username)

    # --- Analytics ---

    def get_class_analytics(self, class_id: str) -> dict[str, list[int]]:
        with self._lock:
            usernames = self._classes.student_usernames(class_id=class_id)
            return self._analytics_for(usernames)

    def get_teacher_analytics(self, teacher_username: str) -> dict[str, list[int]]:
        with self._lock:
            usernames = self._classes.student_usernames(teacher_username=teacher_username)
            return self._analytics_for(usernames)

    def _analytics_for(self, usernames: list[str]) -> dict[str, list[int]]:
        progress_list = self._store.batch_get(progress_key(u) for u in usernames)
        return build_class_analytics(progress_list)
