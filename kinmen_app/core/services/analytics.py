"""Aggregations over student progress documents for the teacher dashboard."""

from __future__ import annotations

from typing import Any, Iterable

from kinmen_app.constants.course_constants import (
    GAME_TYPES,
    VOCAB_CATEGORIES,
    VOCABULARY_TOTAL,
    WEEKDAY_FACTORS,
)

# Upper bounds (inclusive) of the first four buckets; the fifth takes the rest.
_DISTRIBUTION_BOUNDS = (20, 40, 60, 80)


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def vocabulary_percent(progress: dict[str, Any]) -> int:
    viewed = ((progress.get("vocabulary") or {}).get("flashcards") or {}).get("viewed") or 0
    return _round_half_up(viewed / VOCABULARY_TOTAL * 100)


def progress_distribution(progress_list: Iterable[dict[str, Any]]) -> list[int]:
    """Bucket students by vocabulary progress: 0-20, 21-40, 41-60, 61-80, 81-100 percent."""
    distribution = [0] * (len(_DISTRIBUTION_BOUNDS) + 1)
    for progress in progress_list:
        percent = vocabulary_percent(progress)
        bucket = next(
            (i for i, bound in enumerate(_DISTRIBUTION_BOUNDS) if percent <= bound),
            len(_DISTRIBUTION_BOUNDS),
        )
        distribution[bucket] += 1
    return distribution


def vocab_mastery(progress_list: list[dict[str, Any]]) -> list[int]:
    """Average mastered share per vocabulary category, as percents."""
    mastered = {category: 0 for category in VOCAB_CATEGORIES}
    for progress in progress_list:
        cards = (progress.get("vocabulary") or {}).get("masteredCards") or []
        for category, (low, high) in VOCAB_CATEGORIES.items():
            mastered[category] += sum(1 for card_id in cards if low <= card_id <= high)

    student_count = len(progress_list) or 1
    return [
        _round_half_up(mastered[category] / (student_count * (high - low + 1)) * 100)
        for category, (low, high) in VOCAB_CATEGORIES.items()
    ]


def game_preferences(progress_list: Iterable[dict[str, Any]]) -> list[int]:
    totals = [0] * len(GAME_TYPES)
    for progress in progress_list:
        played = ((progress.get("statistics") or {}).get("gamesPlayed")) or {}
        for i, game_type in enumerate(GAME_TYPES):
            totals[i] += played.get(game_type, 0) or 0
    return totals


def weekly_time_data(progress_list: list[dict[str, Any]]) -> list[int]:
    """Spread the average study time over the week using fixed weekday factors.

    Study time is stored as a running total in seconds, not per day, so the
    weekday shape is an estimate.
    """
    total_seconds = sum(
        ((progress.get("statistics") or {}).get("totalStudyTime") or 0) for progress in progress_list
    )
    avg_minutes = _round_half_up(total_seconds / (len(progress_list) or 1) / 60)
    return [_round_half_up(avg_minutes * factor / 7) for factor in WEEKDAY_FACTORS]


def build_class_analytics(progress_list: list[dict[str, Any]]) -> dict[str, list[int]]:
    if not progress_list:
        return {
            "progressDistribution": [0] * (len(_DISTRIBUTION_BOUNDS) + 1),
            "vocabMastery": [0] * len(VOCAB_CATEGORIES),
            "gamePreferences": [0] * len(GAME_TYPES),
            "timeData": [0] * len(WEEKDAY_FACTORS),
        }
    return {
        "progressDistribution": progress_distribution(progress_list),
        "vocabMastery": vocab_mastery(progress_list),
        "gamePreferences": game_preferences(progress_list),
        "timeData": weekly_time_data(progress_list),
    }
