"""Board positions and drag helpers shared by the matching-game tests."""

from kinmen_app.core.models import Point


def left_position(index: int) -> Point:
    return Point(20.0, 20.0 + 20.0 * index)


def right_position(index: int) -> Point:
    return Point(80.0, 20.0 + 20.0 * index)


def drag(game, start: Point, end: Point, pointer_id: int = 0):
    """Press at ``start``, move halfway, release at ``end``."""
    game.pointer_down(start, pointer_id)
    game.pointer_move(Point((start.x + end.x) / 2, (start.y + end.y) / 2), pointer_id)
    return game.pointer_up(end, pointer_id)
