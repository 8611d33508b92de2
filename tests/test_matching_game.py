"""Tests for the MatchingGame facade: scenarios, hooks and setup validation."""

import pytest

from helpers import drag, left_position, right_position
from kinmen_app.core.matching_game import MatchingGame, MatchingSetupError
from kinmen_app.core.models import ConnectionState, EndpointStatus, Point, ValidationResult
from kinmen_app.core.services.feedback_reporter import FeedbackReporter, format_result_message


class RecordingReporter(FeedbackReporter):
    def __init__(self):
        self.results = []

    def report(self, result):
        self.results.append(result)


class TestScenarios:
    def test_single_correct_pair(self, vegetable_game):
        connection = drag(vegetable_game, left_position(0), right_position(0))
        assert connection.left.value == "菜花"
        assert connection.right.value == "tshài-hue"

        result = vegetable_game.check_answers()
        assert result == ValidationResult(correct_count=1, total=1)
        assert connection.state is ConnectionState.CORRECT

    def test_second_press_on_connected_endpoint_ignored(self, vegetable_game):
        drag(vegetable_game, left_position(0), right_position(0))
        assert not vegetable_game.pointer_down(left_position(0))
        assert not vegetable_game.is_dragging()
        assert len(vegetable_game.get_connections()) == 1

    def test_release_over_empty_space(self, vegetable_game):
        assert drag(vegetable_game, left_position(0), Point(50.0, 90.0)) is None
        assert vegetable_game.get_connections() == []
        assert vegetable_game.get_endpoints()[0].status is EndpointStatus.FREE

    def test_all_wrong(self, two_pair_game):
        drag(two_pair_game, left_position(0), right_position(1))
        drag(two_pair_game, left_position(1), right_position(0))
        result = two_pair_game.check_answers()
        assert (result.correct_count, result.total) == (0, 2)
        assert all(c.state is ConnectionState.INCORRECT for c in two_pair_game.get_connections())

    def test_reset_after_validation(self, two_pair_game):
        drag(two_pair_game, left_position(0), right_position(0))
        two_pair_game.check_answers()
        two_pair_game.pointer_down(left_position(1))
        two_pair_game.reset()
        assert two_pair_game.get_connections() == []
        assert not two_pair_game.is_dragging()
        assert all(e.status is EndpointStatus.FREE for e in two_pair_game.get_endpoints())


class TestHooks:
    def test_commit_validate_reset_hooks(self, two_pair_game):
        events = []
        two_pair_game.on_connection_committed.append(lambda c: events.append(("commit", c.value_pair)))
        two_pair_game.on_validated.append(lambda r: events.append(("validated", r.correct_count)))
        two_pair_game.on_reset.append(lambda: events.append(("reset",)))

        drag(two_pair_game, right_position(1), left_position(1))
        two_pair_game.check_answers()
        two_pair_game.reset()
        assert events == [("commit", ("B", "Y")), ("validated", 1), ("reset",)]

    def test_on_changed_fires_during_drag(self, vegetable_game):
        calls = []
        vegetable_game.on_changed.append(lambda: calls.append(1))
        drag(vegetable_game, left_position(0), right_position(0))
        assert len(calls) == 3

    def test_release_from_other_pointer_does_not_fire_on_changed(self, vegetable_game):
        calls = []
        vegetable_game.pointer_down(left_position(0), pointer_id=1)
        vegetable_game.on_changed.append(lambda: calls.append(1))

        assert vegetable_game.pointer_up(right_position(0), pointer_id=2) is None
        assert calls == []
        assert vegetable_game.is_dragging()

        assert vegetable_game.pointer_up(right_position(0), pointer_id=1) is not None
        assert calls == [1]

    def test_failing_hook_does_not_break_commit(self, vegetable_game, caplog):
        def explode(connection):
            raise RuntimeError("subscriber bug")

        vegetable_game.on_connection_committed.append(explode)
        connection = drag(vegetable_game, left_position(0), right_position(0))
        assert connection is not None
        assert vegetable_game.get_endpoints()[0].status is EndpointStatus.CONNECTED
        assert "hook" in caplog.text

    def test_reporter_receives_result(self, make_content):
        reporter = RecordingReporter()
        game = MatchingGame(reporter=reporter)
        game.load_content(make_content(["菜花"], ["tshài-hue"], [("菜花", "tshài-hue")]))
        drag(game, left_position(0), right_position(0))
        game.check_answers()
        assert reporter.results == [ValidationResult(1, 1)]


class TestLifecycle:
    def test_load_content_resets_previous_game(self, two_pair_game, make_content):
        drag(two_pair_game, left_position(0), right_position(0))
        two_pair_game.pointer_down(left_position(1))
        two_pair_game.load_content(make_content(["菜花"], ["tshài-hue"], [("菜花", "tshài-hue")]))
        assert two_pair_game.get_connections() == []
        assert not two_pair_game.is_dragging()
        assert [e.value for e in two_pair_game.get_endpoints()] == ["菜花", "tshài-hue"]

    def test_destroy_ignores_input(self, vegetable_game):
        vegetable_game.destroy()
        assert not vegetable_game.is_active()
        assert not vegetable_game.pointer_down(left_position(0))
        with pytest.raises(RuntimeError):
            vegetable_game.check_answers()

    @pytest.mark.parametrize(
        "left, right, pairs, message",
        [
            ([], ["X"], [("A", "X")], "left-side"),
            (["A"], [], [("A", "X")], "right-side"),
            (["A"], ["X"], [], "empty answer key"),
            (["A"], ["X"], [("B", "X")], "unknown left"),
            (["A"], ["X"], [("A", "Z")], "unknown right"),
        ],
    )
    def test_malformed_content_fails_fast(self, make_content, left, right, pairs, message):
        game = MatchingGame()
        with pytest.raises(MatchingSetupError, match=message):
            game.load_content(make_content(left, right, pairs))
        assert not game.is_active()


def test_format_result_message():
    assert format_result_message(ValidationResult(2, 2)) == "答對 2 / 2 題！ 太棒了！"
    assert format_result_message(ValidationResult(1, 2)) == "答對 1 / 2 題！"
