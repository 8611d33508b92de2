"""Tests for ClassService and the ProgressManager facade."""

from datetime import datetime, timezone
import random
import re

import pytest

from kinmen_app.core.progress_manager import ProgressManager
from kinmen_app.core.services.class_service import (
    ClassNotFoundError,
    ClassService,
    InviteCodeNotFoundError,
)
from kinmen_app.core.services.document_store import DocumentStore, invite_key
from kinmen_app.core.services.progress_service import ProgressNotFoundError, ProgressService


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def classes(store):
    return ClassService(store, rng=random.Random(7))


@pytest.fixture
def progress(store):
    return ProgressService(store)


def test_create_class_generates_ids(classes):
    item = classes.create_class("ms_lin", "  三年甲班 ")
    assert item["className"] == "三年甲班"
    assert re.fullmatch(r"class_[0-9a-z]+_[0-9a-f]{8}", item["classId"])
    assert re.fullmatch(r"KM[A-HJ-NP-Z2-9]{6}", item["inviteCode"])
    assert classes.get_class(item["classId"])["studentUsernames"] == []


@pytest.mark.parametrize("name", ["", "   ", "x" * 51])
def test_create_class_validates_name(classes, name):
    with pytest.raises(ValueError):
        classes.create_class("ms_lin", name)


def test_join_class(classes, progress):
    progress.create_student("amy")
    item = classes.create_class("ms_lin", "A")
    classes.join_class("amy", item["inviteCode"].lower())
    classes.join_class("amy", item["inviteCode"])
    assert classes.student_usernames(class_id=item["classId"]) == ["amy"]


def test_join_with_bad_code(classes, progress):
    progress.create_student("amy")
    with pytest.raises(InviteCodeNotFoundError):
        classes.join_class("amy", "KMNOPE00")


def test_join_requires_existing_student(classes):
    item = classes.create_class("ms_lin", "A")
    with pytest.raises(ProgressNotFoundError):
        classes.join_class("ghost", item["inviteCode"])


def test_unknown_class(classes):
    with pytest.raises(ClassNotFoundError):
        classes.get_class("class_missing")


def test_teacher_students_are_deduplicated(classes, progress):
    for name in ("amy", "ben", "cai"):
        progress.create_student(name)
    first = classes.create_class("ms_lin", "A")
    second = classes.create_class("ms_lin", "B")
    classes.join_class("amy", first["inviteCode"])
    classes.join_class("ben", first["inviteCode"])
    classes.join_class("ben", second["inviteCode"])
    classes.join_class("cai", second["inviteCode"])
    assert classes.student_usernames(teacher_username="ms_lin") == ["amy", "ben", "cai"]
    assert classes.student_usernames(teacher_username="nobody") == []


def test_list_class_students_summary(classes, progress):
    progress.create_student("amy")
    progress.update_progress("amy", vocabulary={"flashcards": {"viewed": 27}, "masteredCards": [1, 2]})
    progress.record_game_played("amy", "matching", 80)
    item = classes.create_class("ms_lin", "A")
    classes.join_class("amy", item["inviteCode"])

    roster = classes.list_class_students(item["classId"])
    assert roster["className"] == "A"
    (student,) = roster["students"]
    assert student["vocabularyProgress"] == {"viewed": 27, "mastered": 2, "total": 27, "percent": 100}
    assert student["gamesPlayed"] == 1
    assert student["dailyStreak"] == 1


def test_manager_class_analytics():
    manager = ProgressManager()
    manager.create_student("amy")
    manager.create_student("ben")
    manager.update_progress("amy", vocabulary={"flashcards": {"viewed": 27}})
    manager.record_game_played("ben", "duel", 50)
    item = manager.create_class("ms_lin", "A")
    manager.join_class("amy", item["inviteCode"])
    manager.join_class("ben", item["inviteCode"])

    analytics = manager.get_class_analytics(item["classId"])
    assert analytics["progressDistribution"] == [1, 0, 0, 0, 1]
    assert analytics["gamePreferences"] == [0, 0, 0, 0, 1]
    assert manager.get_teacher_analytics("ms_lin") == analytics


def test_manager_ensure_student_is_idempotent():
    manager = ProgressManager()
    first = manager.ensure_student("guest")
    assert manager.ensure_student("guest")["createdAt"] == first["createdAt"]


class StuckRandom:
    """Always draws the same character, so every random invite code collides."""

    def choice(self, alphabet):
        return alphabet[0]


def test_invite_code_fallback_never_reuses_a_code(store):
    now = datetime(2026, 10, 12, 9, 0, tzinfo=timezone.utc)
    classes = ClassService(store, rng=StuckRandom(), clock=lambda: now)

    first = classes.create_class("ms_lin", "A")
    second = classes.create_class("ms_lin", "B")
    assert first["inviteCode"] == "KMAAAAAA"
    assert second["inviteCode"] != first["inviteCode"]

    with pytest.raises(ValueError, match="unique invite code"):
        classes.create_class("ms_lin", "C")
    assert store.get(invite_key(second["inviteCode"]))["classId"] == second["classId"]


def test_student_detail_without_dialogue_list(classes, progress):
    progress.create_student("amy")
    detail = classes.student_detail("amy")
    assert detail["vocabulary"]["byCategory"]["vegetable"] == {"viewed": 0, "mastered": 0, "total": 13}
    assert detail["dialogue"]["completed"] == 0
    assert all(s["status"] == "not_started" for s in detail["dialogue"]["scenarios"])
    assert set(detail["games"]) == {"matching", "sorting", "maze", "bingo", "duel"}

    with pytest.raises(ProgressNotFoundError):
        classes.student_detail("ghost")
