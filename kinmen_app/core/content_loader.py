"""Utilities for loading the course configuration from JSON.

File format::

    {
      "title": "金門話 - 蔬果篇",
      "slides": [
        {"id": 1, "title": "Welcome", "type": "content", "notes": "Markdown text"},
        {
          "id": 19,
          "title": "連連看",
          "type": "matching",
          "matchingData": {
            "leftPoints": [{"value": "菜花", "x": "20%", "y": "30%"}],
            "rightPoints": [{"value": "tshài-hue", "x": "80%", "y": "30%"}],
            "pairs": [{"left": "菜花", "right": "tshài-hue"}]
          }
        }
      ]
    }

Coordinates are percentages of the render surface, written either as
``"30%"`` strings or plain numbers.
"""

from __future__ import annotations

import json
from pathlib import Path

from kinmen_app.core.models import AnswerKey, Course, MatchingContent, Point, Slide, Term


DEFAULT_COURSE_PATH = Path(__file__).resolve().parent.parent / "data" / "course.json"


class CourseContentError(Exception):
    """Raised when a course configuration cannot be parsed."""


_SLIDE_TYPES = {"content", "vocabulary", "matching"}


def load_course_from_file(file_path: Path) -> Course:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CourseContentError(f"Could not read course file {file_path}: {exc}") from exc
    return parse_course(text)


def parse_course(text: str) -> Course:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CourseContentError(f"Course file is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise CourseContentError("Course configuration must be a JSON object.")

    raw_slides = raw.get("slides")
    if not isinstance(raw_slides, list) or not raw_slides:
        raise CourseContentError("Course configuration did not contain any slides.")

    slides = [_parse_slide(entry, position) for position, entry in enumerate(raw_slides, start=1)]
    title = str(raw.get("title") or "").strip() or "Untitled course"
    return Course(title=title, slides=slides)


def _parse_slide(entry: object, position: int) -> Slide:
    if not isinstance(entry, dict):
        raise CourseContentError(f"Slide {position} must be an object.")

    slide_type = str(entry.get("type") or "content").strip().lower()
    if slide_type not in _SLIDE_TYPES:
        raise CourseContentError(f"Slide {position} has unknown type '{slide_type}'.")

    matching = None
    if slide_type == "matching":
        matching_data = entry.get("matchingData")
        if not isinstance(matching_data, dict):
            raise CourseContentError(f"Matching slide {position} is missing matchingData.")
        matching = parse_matching_data(matching_data)

    try:
        slide_id = int(entry.get("id", position))
    except (TypeError, ValueError) as exc:
        raise CourseContentError(f"Slide {position} has a non-integer id.") from exc

    audio = entry.get("audio")
    return Slide(
        id=slide_id,
        title=str(entry.get("title") or f"Slide {position}").strip(),
        slide_type=slide_type,
        notes=str(entry.get("notes") or ""),
        audio=str(audio) if audio else None,
        matching=matching,
    )


def parse_matching_data(data: dict) -> MatchingContent:
    left_terms = [_parse_term(item, "leftPoints") for item in data.get("leftPoints") or []]
    right_terms = [_parse_term(item, "rightPoints") for item in data.get("rightPoints") or []]

    pairs: list[tuple[str, str]] = []
    for item in data.get("pairs") or []:
        if not isinstance(item, dict) or "left" not in item or "right" not in item:
            raise CourseContentError("Each pair must define 'left' and 'right'.")
        pairs.append((str(item["left"]), str(item["right"])))

    return MatchingContent(
        left_terms=left_terms,
        right_terms=right_terms,
        answer_key=AnswerKey.from_pairs(pairs),
    )


def _parse_term(item: object, section: str) -> Term:
    if not isinstance(item, dict) or "value" not in item:
        raise CourseContentError(f"Every entry in {section} needs a 'value'.")
    value = str(item["value"]).strip()
    if not value:
        raise CourseContentError(f"Entry in {section} has an empty value.")
    return Term(value=value, position=Point(_parse_coordinate(item.get("x")), _parse_coordinate(item.get("y"))))


def _parse_coordinate(raw: object) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    elif isinstance(raw, str):
        stripped = raw.strip().removesuffix("%").strip()
        try:
            value = float(stripped)
        except ValueError as exc:
            raise CourseContentError(f"Invalid coordinate '{raw}'.") from exc
    else:
        raise CourseContentError(f"Missing or invalid coordinate: {raw!r}.")
    if not 0.0 <= value <= 100.0:
        raise CourseContentError(f"Coordinate {value} is outside 0-100%.")
    return value
