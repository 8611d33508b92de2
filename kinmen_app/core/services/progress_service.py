"""Service for reading and updating a student's learning progress."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

from kinmen_app.constants.course_constants import (
    BEST_SCORE_GAME_TYPES,
    DIALOGUE_SCENARIO_TOTAL,
    FLASHCARD_TOTAL,
    GAME_TYPES,
    VOCABULARY_TOTAL,
)
from kinmen_app.core.services.achievements import AchievementTracker, empty_achievements
from kinmen_app.core.services.document_store import DocumentStore, progress_key


class ProgressNotFoundError(LookupError):
    """Raised when no progress document exists for a username."""


class StudentExistsError(Exception):
    """Raised when creating progress for a username that already has one."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def empty_statistics() -> dict[str, Any]:
    return {
        "totalStudyTime": 0,
        "vocabularyMastered": [],
        "gamesPlayed": {game_type: 0 for game_type in GAME_TYPES},
        "bestScores": {game_type: 0 for game_type in BEST_SCORE_GAME_TYPES},
        "dailyStreak": 0,
        "lastStudyDate": None,
    }


class ProgressService:
    """CRUD operations over ``PROGRESS#<username>`` documents."""

    def __init__(
        self,
        store: DocumentStore,
        clock=_utcnow,
        achievements: AchievementTracker | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._achievements = achievements or AchievementTracker(clock=clock)

    def create_student(self, username: str) -> dict[str, Any]:
        username = _clean_username(username)
        key = progress_key(username)
        if self._store.contains(key):
            raise StudentExistsError(f"Student '{username}' already exists.")
        now = self._clock().isoformat()
        item = {
            "username": username,
            "vocabulary": {
                "flashcards": {"viewed": 0, "total": FLASHCARD_TOTAL},
                "viewedCards": [],
                "masteredCards": [],
            },
            "dialogue": {
                "scenarios": {"completed": 0, "total": DIALOGUE_SCENARIO_TOTAL},
                "viewedScenarios": [],
            },
            "practice": {},
            "statistics": empty_statistics(),
            "achievements": empty_achievements(),
            "createdAt": now,
            "updatedAt": now,
        }
        self._store.put(key, item)
        return item

    def has_student(self, username: str) -> bool:
        return self._store.contains(progress_key(username))

    def get_progress(self, username: str) -> dict[str, Any]:
        item = self._store.get(progress_key(_clean_username(username)))
        if item is None:
            raise ProgressNotFoundError(f"No progress found for '{username}'.")
        return item

    def update_progress(
        self,
        username: str,
        vocabulary: dict[str, Any] | None = None,
        dialogue: dict[str, Any] | None = None,
        practice: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Replace the given sections and stamp ``updatedAt``."""
        item = self.get_progress(username)
        updates = {
            name: value
            for name, value in (("vocabulary", vocabulary), ("dialogue", dialogue), ("practice", practice))
            if value is not None
        }
        if not updates:
            raise ValueError("No progress data supplied to update.")
        item.update(updates)
        item["updatedAt"] = self._clock().isoformat()
        self._store.put(progress_key(item["username"]), item)
        return item

    def record_game_played(self, username: str, game_type: str, score: int = 0) -> dict[str, Any]:
        """Count one finished game and keep the best score."""
        if game_type not in GAME_TYPES:
            raise ValueError(f"Unknown game type '{game_type}'.")
        if not 0 <= score <= 100:
            raise ValueError("Score must be between 0 and 100.")

        item = self.get_progress(username)
        stats = item.get("statistics") or empty_statistics()
        games_played = stats.setdefault("gamesPlayed", {})
        games_played[game_type] = games_played.get(game_type, 0) + 1

        best_scores = stats.setdefault("bestScores", {})
        if game_type in BEST_SCORE_GAME_TYPES and score > best_scores.get(game_type, 0):
            best_scores[game_type] = score

        return self._save_statistics(item, stats)

    def record_vocabulary_learned(self, username: str, vocab_id: int) -> dict[str, Any]:
        """Mark one vocabulary card as learned in the statistics."""
        if not 1 <= vocab_id <= VOCABULARY_TOTAL:
            raise ValueError(f"Vocabulary id must be between 1 and {VOCABULARY_TOTAL}.")

        item = self.get_progress(username)
        stats = item.get("statistics") or empty_statistics()
        mastered = stats.setdefault("vocabularyMastered", [])
        if vocab_id not in mastered:
            mastered.append(vocab_id)
        return self._save_statistics(item, stats)

    def _save_statistics(self, item: dict[str, Any], stats: dict[str, Any]) -> dict[str, Any]:
        now = self._clock()
        _update_daily_streak(stats, now.date())
        item["statistics"] = stats
        self._achievements.evaluate(item)
        item["updatedAt"] = now.isoformat()
        self._store.put(progress_key(item["username"]), item)
        return item


def _update_daily_streak(stats: dict[str, Any], today: date) -> None:
    last = stats.get("lastStudyDate")
    last_date = date.fromisoformat(last) if last else None
    if last_date == today:
        return
    if last_date == today - timedelta(days=1):
        stats["dailyStreak"] = stats.get("dailyStreak", 0) + 1
    else:
        stats["dailyStreak"] = 1
    stats["lastStudyDate"] = today.isoformat()


def _clean_username(username: str) -> str:
    cleaned = (username or "").strip()
    if not cleaned:
        raise ValueError("Username must not be empty.")
    return cleaned


def format_progress(item: dict[str, Any]) -> dict[str, Any]:
    """Public view of a progress document."""
    return {
        "vocabulary": item.get("vocabulary"),
        "dialogue": item.get("dialogue"),
        "practice": item.get("practice"),
        "statistics": item.get("statistics"),
        "achievements": item.get("achievements") or empty_achievements(),
        "lastAccess": item.get("updatedAt"),
    }
