"""Tests for the teacher analytics aggregations."""

from kinmen_app.core.services.analytics import (
    build_class_analytics,
    game_preferences,
    progress_distribution,
    vocab_mastery,
    vocabulary_percent,
    weekly_time_data,
)


def _progress(viewed=0, mastered=(), games=None, study_seconds=0):
    return {
        "vocabulary": {"flashcards": {"viewed": viewed}, "masteredCards": list(mastered)},
        "statistics": {"gamesPlayed": games or {}, "totalStudyTime": study_seconds},
    }


def test_vocabulary_percent_rounds_half_up():
    # 27 words: 10 viewed -> 37.04%, 27 viewed -> 100%
    assert vocabulary_percent(_progress(viewed=10)) == 37
    assert vocabulary_percent(_progress(viewed=27)) == 100
    assert vocabulary_percent({}) == 0


def test_progress_distribution_buckets():
    # 0% -> b0, 5/27=19% -> b0, 6/27=22% -> b1, 16/27=59% -> b2, 21/27=78% -> b3, 27/27 -> b4
    progress_list = [_progress(viewed=v) for v in (0, 5, 6, 16, 21, 27)]
    assert progress_distribution(progress_list) == [2, 1, 1, 1, 1]


def test_vocab_mastery_per_category():
    progress_list = [
        _progress(mastered=range(1, 13)),  # all fruit
        _progress(mastered=[13, 26]),
    ]
    # fruit 12/24=50, vegetable 1/26=3.8 -> 4, item 1/4=25
    assert vocab_mastery(progress_list) == [50, 4, 25]


def test_game_preferences_totals():
    progress_list = [
        _progress(games={"matching": 2, "duel": 1}),
        _progress(games={"matching": 1, "maze": 4}),
        {},
    ]
    assert game_preferences(progress_list) == [3, 0, 4, 0, 1]


def test_weekly_time_data():
    # average 7000 s -> 117 min; Tuesday factor 1.0 -> 117/7 = 16.7 -> 17
    progress_list = [_progress(study_seconds=4000), _progress(study_seconds=10000)]
    data = weekly_time_data(progress_list)
    assert len(data) == 7
    assert data[1] == 17
    assert data[6] == 7


def test_empty_class_returns_zero_arrays():
    assert build_class_analytics([]) == {
        "progressDistribution": [0, 0, 0, 0, 0],
        "vocabMastery": [0, 0, 0],
        "gamePreferences": [0, 0, 0, 0, 0],
        "timeData": [0, 0, 0, 0, 0, 0, 0],
    }
