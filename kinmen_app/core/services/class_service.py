"""Service for teacher classes, invite codes and class rosters."""

from __future__ import annotations

from datetime import datetime, timezone
import random
import secrets
from typing import Any

from kinmen_app.constants.course_constants import (
    CLASS_NAME_MAX_LENGTH,
    DIALOGUE_SCENARIO_TOTAL,
    DIALOGUE_SCENARIOS,
    GAME_TYPES,
    INVITE_CODE_ALPHABET,
    INVITE_CODE_LENGTH,
    INVITE_CODE_MAX_ATTEMPTS,
    INVITE_CODE_PREFIX,
    VOCAB_CATEGORIES,
    VOCABULARY_TOTAL,
)
from kinmen_app.core.services.achievements import ACHIEVEMENTS
from kinmen_app.core.services.analytics import vocabulary_percent
from kinmen_app.core.services.document_store import (
    DocumentStore,
    class_key,
    invite_key,
    progress_key,
    teacher_key,
)
from kinmen_app.core.services.progress_service import ProgressNotFoundError


class ClassNotFoundError(LookupError):
    """Raised when a class id does not exist."""


class InviteCodeNotFoundError(LookupError):
    """Raised when an invite code does not belong to any class."""


_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


class ClassService:
    """Creates classes and resolves which students belong to them."""

    def __init__(self, store: DocumentStore, rng: random.Random | None = None, clock=_utcnow) -> None:
        self._store = store
        self._rng = rng or random.Random()
        self._clock = clock

    def create_class(self, teacher_username: str, class_name: str) -> dict[str, Any]:
        teacher_username = (teacher_username or "").strip()
        if not teacher_username:
            raise ValueError("Teacher username must not be empty.")
        cleaned_name = (class_name or "").strip()
        if not cleaned_name:
            raise ValueError("Class name must not be empty.")
        if len(cleaned_name) > CLASS_NAME_MAX_LENGTH:
            raise ValueError(f"Class name must be at most {CLASS_NAME_MAX_LENGTH} characters.")

        now = self._clock()
        class_id = f"class_{_to_base36(int(now.timestamp() * 1000))}_{secrets.token_hex(4)}"
        invite_code = self._generate_unique_invite_code(now)
        item = {
            "classId": class_id,
            "className": cleaned_name,
            "teacherUsername": teacher_username,
            "inviteCode": invite_code,
            "studentUsernames": [],
            "createdAt": now.isoformat(),
            "updatedAt": now.isoformat(),
        }
        self._store.put(class_key(class_id), item)
        self._store.put(invite_key(invite_code), {"classId": class_id, "inviteCode": invite_code})

        teacher = self._store.get(teacher_key(teacher_username)) or {
            "username": teacher_username,
            "classIds": [],
        }
        teacher["classIds"].append(class_id)
        self._store.put(teacher_key(teacher_username), teacher)
        return item

    def get_class(self, class_id: str) -> dict[str, Any]:
        item = self._store.get(class_key(class_id))
        if item is None:
            raise ClassNotFoundError(f"Class '{class_id}' does not exist.")
        return item

    def join_class(self, username: str, invite_code: str) -> dict[str, Any]:
        """Add a student to the class owning ``invite_code``."""
        code = (invite_code or "").strip().upper()
        invite = self._store.get(invite_key(code))
        if invite is None:
            raise InviteCodeNotFoundError(f"Invite code '{invite_code}' is not valid.")
        if not self._store.contains(progress_key(username)):
            raise ProgressNotFoundError(f"No progress found for '{username}'.")

        item = self.get_class(invite["classId"])
        if username not in item["studentUsernames"]:
            item["studentUsernames"].append(username)
            item["updatedAt"] = self._clock().isoformat()
            self._store.put(class_key(item["classId"]), item)
        return item

    def student_usernames(self, class_id: str | None = None, teacher_username: str | None = None) -> list[str]:
        """Students of one class, or the de-duplicated students of all a teacher's classes."""
        if class_id is not None:
            return list(self.get_class(class_id).get("studentUsernames") or [])

        teacher = self._store.get(teacher_key(teacher_username or "")) or {}
        class_keys = [class_key(cid) for cid in teacher.get("classIds") or []]
        usernames: list[str] = []
        for item in self._store.batch_get(class_keys):
            for username in item.get("studentUsernames") or []:
                if username not in usernames:
                    usernames.append(username)
        return usernames

    def list_class_students(self, class_id: str) -> dict[str, Any]:
        item = self.get_class(class_id)
        usernames = item.get("studentUsernames") or []
        progress_by_user = {
            progress["username"]: progress
            for progress in self._store.batch_get(progress_key(u) for u in usernames)
        }

        students = [_summarize_student(u, progress_by_user.get(u, {})) for u in usernames]
        students.sort(key=lambda s: s["lastActive"] or "", reverse=True)
        return {
            "className": item["className"],
            "inviteCode": item["inviteCode"],
            "students": students,
        }

    def student_detail(self, username: str) -> dict[str, Any]:
        """Teacher view of one student: vocabulary by category, dialogues, games, achievements."""
        progress = self._store.get(progress_key(username))
        if progress is None:
            raise ProgressNotFoundError(f"No progress found for '{username}'.")

        vocabulary = progress.get("vocabulary") or {}
        viewed_cards = set(vocabulary.get("viewedCards") or [])
        mastered_cards = set(vocabulary.get("masteredCards") or [])
        by_category = {}
        for category, (first, last) in VOCAB_CATEGORIES.items():
            ids = range(first, last + 1)
            by_category[category] = {
                "viewed": sum(1 for i in ids if i in viewed_cards),
                "mastered": sum(1 for i in ids if i in mastered_cards),
                "total": len(ids),
            }

        dialogue = progress.get("dialogue") or {}
        completed_scenarios = dialogue.get("completedScenarios")
        if completed_scenarios is None:
            completed = (dialogue.get("scenarios") or {}).get("completed") or 0
            completed_scenarios = []
        else:
            completed = len(completed_scenarios)

        statistics = progress.get("statistics") or {}
        games_played = statistics.get("gamesPlayed") or {}
        best_scores = statistics.get("bestScores") or {}
        achievements = progress.get("achievements") or {}
        return {
            "username": progress["username"],
            "vocabulary": {
                "viewed": len(viewed_cards),
                "mastered": len(mastered_cards),
                "total": VOCABULARY_TOTAL,
                "byCategory": by_category,
            },
            "dialogue": {
                "completed": completed,
                "total": DIALOGUE_SCENARIO_TOTAL,
                "scenarios": [
                    {"id": s, "status": "completed" if s in completed_scenarios else "not_started"}
                    for s in DIALOGUE_SCENARIOS
                ],
            },
            "games": {
                game_type: {
                    "played": games_played.get(game_type, 0),
                    "bestScore": best_scores.get(game_type, 0),
                }
                for game_type in GAME_TYPES
            },
            "statistics": {
                "totalStudyTime": statistics.get("totalStudyTime") or 0,
                "dailyStreak": statistics.get("dailyStreak") or 0,
                "lastStudyDate": statistics.get("lastStudyDate"),
            },
            "achievements": {
                "unlocked": achievements.get("unlocked") or [],
                "unlockedAt": achievements.get("unlockedAt") or {},
                "total": len(ACHIEVEMENTS),
            },
        }

    def _generate_unique_invite_code(self, now: datetime) -> str:
        for _ in range(INVITE_CODE_MAX_ATTEMPTS):
            code = INVITE_CODE_PREFIX + "".join(
                self._rng.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH)
            )
            if not self._store.contains(invite_key(code)):
                return code
        code = INVITE_CODE_PREFIX + _to_base36(int(now.timestamp() * 1000)).upper()[-INVITE_CODE_LENGTH:]
        if self._store.contains(invite_key(code)):
            raise ValueError("Could not generate a unique invite code; try again.")
        return code


def _summarize_student(username: str, progress: dict[str, Any]) -> dict[str, Any]:
    vocabulary = progress.get("vocabulary") or {}
    statistics = progress.get("statistics") or {}
    games_played = statistics.get("gamesPlayed") or {}
    return {
        "username": username,
        "lastActive": statistics.get("lastStudyDate") or progress.get("updatedAt"),
        "vocabularyProgress": {
            "viewed": (vocabulary.get("flashcards") or {}).get("viewed") or 0,
            "mastered": len(vocabulary.get("masteredCards") or []),
            "total": VOCABULARY_TOTAL,
            "percent": vocabulary_percent(progress),
        },
        "dialogueProgress": {
            "completed": ((progress.get("dialogue") or {}).get("scenarios") or {}).get("completed") or 0,
            "total": DIALOGUE_SCENARIO_TOTAL,
        },
        "totalStudyTime": statistics.get("totalStudyTime") or 0,
        "gamesPlayed": sum(games_played.values()),
        "dailyStreak": statistics.get("dailyStreak") or 0,
    }
