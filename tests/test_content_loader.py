"""Tests for the JSON course loader."""

import json

import pytest

from kinmen_app.core.content_loader import (
    DEFAULT_COURSE_PATH,
    CourseContentError,
    load_course_from_file,
    parse_course,
)
from kinmen_app.core.matching_game import MatchingGame
from kinmen_app.core.models import Point


def _course(slides, title="測試"):
    return json.dumps({"title": title, "slides": slides}, ensure_ascii=False)


MATCHING_SLIDE = {
    "id": 19,
    "title": "連連看",
    "type": "matching",
    "matchingData": {
        "leftPoints": [{"value": "菜花", "x": "20%", "y": "30%"}],
        "rightPoints": [{"value": "tshài-hue", "x": 80, "y": 30.5}],
        "pairs": [{"left": "菜花", "right": "tshài-hue"}],
    },
}


def test_parses_matching_slide():
    course = parse_course(_course([MATCHING_SLIDE]))
    slide = course.get_slide(0)
    assert slide.slide_type == "matching"
    assert slide.matching.left_terms[0].position == Point(20.0, 30.0)
    assert slide.matching.right_terms[0].position == Point(80.0, 30.5)
    assert ("菜花", "tshài-hue") in slide.matching.answer_key


def test_content_slide_defaults():
    course = parse_course(_course([{"title": "Hello"}]))
    slide = course.get_slide(0)
    assert slide.id == 1
    assert slide.slide_type == "content"
    assert slide.matching is None
    assert slide.audio is None


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        json.dumps({"slides": []}),
        _course([{"type": "quiz"}]),
        _course([{"type": "matching"}]),
        _course([{**MATCHING_SLIDE, "matchingData": {"leftPoints": [{"value": "A", "x": "abc", "y": 1}]}}]),
        _course([{**MATCHING_SLIDE, "matchingData": {"leftPoints": [{"value": "A", "x": 120, "y": 1}]}}]),
        _course([{**MATCHING_SLIDE, "matchingData": {"pairs": [{"left": "A"}]}}]),
    ],
)
def test_rejects_malformed_course(text):
    with pytest.raises(CourseContentError):
        parse_course(text)


def test_missing_file(tmp_path):
    with pytest.raises(CourseContentError):
        load_course_from_file(tmp_path / "missing.json")


def test_bundled_course_is_playable():
    course = load_course_from_file(DEFAULT_COURSE_PATH)
    matching_slides = [s for s in course.slides if s.matching is not None]
    assert matching_slides
    game = MatchingGame()
    for slide in matching_slides:
        game.load_content(slide.matching)
        assert game.is_active()
