"""Shared fixtures for the course player tests."""

import pytest

from helpers import left_position, right_position
from kinmen_app.core.matching_game import MatchingGame
from kinmen_app.core.models import AnswerKey, MatchingContent, Term


@pytest.fixture
def make_content():
    """Build MatchingContent with left terms at x=20% and right terms at x=80%."""

    def _make(left_values, right_values, pairs):
        return MatchingContent(
            left_terms=[Term(v, left_position(i)) for i, v in enumerate(left_values)],
            right_terms=[Term(v, right_position(i)) for i, v in enumerate(right_values)],
            answer_key=AnswerKey.from_pairs(pairs),
        )

    return _make


@pytest.fixture
def vegetable_game(make_content):
    game = MatchingGame()
    game.load_content(make_content(["菜花"], ["tshài-hue"], [("菜花", "tshài-hue")]))
    return game


@pytest.fixture
def two_pair_game(make_content):
    game = MatchingGame()
    game.load_content(make_content(["A", "B"], ["X", "Y"], [("A", "X"), ("B", "Y")]))
    return game
