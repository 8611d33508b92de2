"""Achievement definitions and the tracker that unlocks them from statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import logging
from typing import Any, Callable

from kinmen_app.constants.course_constants import GAME_TYPES, VOCABULARY_TOTAL

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Achievement:
    id: str
    name: str
    description: str
    condition: Callable[[dict[str, Any]], bool]


def _mastered(stats: dict[str, Any]) -> int:
    return len(stats.get("vocabularyMastered") or [])


def _played(stats: dict[str, Any], game_type: str) -> int:
    return (stats.get("gamesPlayed") or {}).get(game_type, 0)


def _best(stats: dict[str, Any], game_type: str) -> int:
    return (stats.get("bestScores") or {}).get(game_type, 0)


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement("first_word", "初學者", "學習第 1 個詞彙", lambda s: _mastered(s) >= 1),
    Achievement("vocab_10", "詞彙達人", "學習 10 個詞彙", lambda s: _mastered(s) >= 10),
    Achievement(
        "vocab_all",
        "詞彙大師",
        f"學習全部 {VOCABULARY_TOTAL} 個詞彙",
        lambda s: _mastered(s) >= VOCABULARY_TOTAL,
    ),
    Achievement(
        "game_first",
        "遊戲新手",
        "完成第 1 個遊戲",
        lambda s: any(_played(s, g) > 0 for g in GAME_TYPES),
    ),
    Achievement(
        "game_all",
        "遊戲專家",
        f"玩過所有 {len(GAME_TYPES)} 種遊戲",
        lambda s: all(_played(s, g) > 0 for g in GAME_TYPES),
    ),
    Achievement("perfect_match", "完美配對", "連連看獲得滿分", lambda s: _best(s, "matching") >= 100),
    Achievement("speed_demon", "閃電反應", "決鬥遊戲獲得 100 分", lambda s: _best(s, "duel") >= 100),
    Achievement("streak_3", "堅持學習", "連續 3 天學習", lambda s: (s.get("dailyStreak") or 0) >= 3),
    Achievement("streak_7", "學習週冠", "連續 7 天學習", lambda s: (s.get("dailyStreak") or 0) >= 7),
)


def empty_achievements() -> dict[str, Any]:
    return {"unlocked": [], "unlockedAt": {}}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AchievementTracker:
    """Unlocks achievements on a progress document.

    Each service owns its own tracker; nothing is kept between calls except
    what is written into the document itself.
    """

    def __init__(self, definitions: tuple[Achievement, ...] = ACHIEVEMENTS, clock=_utcnow) -> None:
        self._definitions = definitions
        self._clock = clock

    def definitions(self) -> tuple[Achievement, ...]:
        return self._definitions

    def evaluate(self, item: dict[str, Any]) -> list[Achievement]:
        """Unlock every definition whose condition now holds; return the new ones."""
        stats = item.get("statistics") or {}
        achievements = item.setdefault("achievements", empty_achievements())
        unlocked = achievements.setdefault("unlocked", [])
        unlocked_at = achievements.setdefault("unlockedAt", {})

        newly_unlocked = []
        for achievement in self._definitions:
            if achievement.id in unlocked or not achievement.condition(stats):
                continue
            unlocked.append(achievement.id)
            unlocked_at[achievement.id] = self._clock().isoformat()
            newly_unlocked.append(achievement)

        if newly_unlocked:
            logger.info(
                "%s unlocked: %s",
                item.get("username"),
                ", ".join(a.id for a in newly_unlocked),
            )
        return newly_unlocked
