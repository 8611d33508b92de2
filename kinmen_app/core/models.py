"""Domain models for the matching game and course content."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
import math


class Side(Enum):
    """Column an endpoint belongs to."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class EndpointStatus(Enum):
    """Mutually exclusive interaction state of an endpoint."""

    FREE = auto()
    ACTIVE = auto()
    CONNECTED = auto()
    CORRECT = auto()
    INCORRECT = auto()


class ConnectionState(Enum):
    """Visual state of a committed connection."""

    PENDING = auto()
    CORRECT = auto()
    INCORRECT = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """Coordinate in percent of the render surface (0-100 on both axes)."""

    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True, slots=True)
class Term:
    """A term as declared by the course content, before registration."""

    value: str
    position: Point


@dataclass(slots=True, eq=False)
class Endpoint:
    """A connectable term owned by the point registry."""

    side: Side
    index: int
    value: str
    position: Point
    status: EndpointStatus = EndpointStatus.FREE

    @property
    def key(self) -> tuple[Side, int]:
        return (self.side, self.index)

    def is_free(self) -> bool:
        return self.status is EndpointStatus.FREE


@dataclass(slots=True)
class LineGeometry:
    """Renderable straight line between two surface coordinates."""

    start: Point
    end: Point


@dataclass(slots=True, eq=False)
class Connection:
    """A committed pairing between one LEFT and one RIGHT endpoint."""

    left: Endpoint
    right: Endpoint
    line: LineGeometry
    state: ConnectionState = ConnectionState.PENDING

    @property
    def value_pair(self) -> tuple[str, str]:
        return (self.left.value, self.right.value)


@dataclass(frozen=True, slots=True)
class AnswerKey:
    """Immutable ground truth of correct (left value, right value) pairs."""

    pairs: frozenset[tuple[str, str]]

    @classmethod
    def from_pairs(cls, pairs) -> "AnswerKey":
        return cls(pairs=frozenset((str(left), str(right)) for left, right in pairs))

    def __contains__(self, pair: object) -> bool:
        return pair in self.pairs

    def __len__(self) -> int:
        return len(self.pairs)


@dataclass(slots=True)
class DragSession:
    """Ephemeral state of one in-progress connection attempt."""

    origin: Endpoint
    pointer: Point
    line: LineGeometry
    pointer_id: int = 0


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of checking the committed connections against the answer key."""

    correct_count: int
    total: int

    @property
    def is_perfect(self) -> bool:
        return self.total > 0 and self.correct_count == self.total

    @property
    def score_percent(self) -> int:
        if self.total <= 0:
            return 0
        return round(self.correct_count / self.total * 100)


@dataclass(slots=True)
class MatchingContent:
    """Per-game content: ordered left terms, ordered right terms, answer key."""

    left_terms: list[Term]
    right_terms: list[Term]
    answer_key: AnswerKey


@dataclass(slots=True)
class Slide:
    """A single slide of the course."""

    id: int
    title: str
    slide_type: str = "content"
    notes: str = ""
    audio: str | None = None
    matching: MatchingContent | None = None


@dataclass(slots=True)
class Course:
    """Ordered collection of slides loaded from the course configuration."""

    title: str
    slides: list[Slide] = field(default_factory=list)

    def slide_count(self) -> int:
        return len(self.slides)

    def get_slide(self, index: int) -> Slide:
        if not 0 <= index < len(self.slides):
            raise IndexError(f"Slide index {index} out of range")
        return self.slides[index]
