"""Course-wide constants shared by the progress and analytics services."""

DEFAULT_STUDENT_USERNAME: str = "guest"

VOCABULARY_TOTAL: int = 27
FLASHCARD_TOTAL: int = 26
DIALOGUE_SCENARIO_TOTAL: int = 7

# Inclusive card id ranges per vocabulary category.
VOCAB_CATEGORIES: dict[str, tuple[int, int]] = {
    "fruit": (1, 12),
    "vegetable": (13, 25),
    "item": (26, 27),
}

GAME_TYPES: tuple[str, ...] = ("matching", "sorting", "maze", "bingo", "duel")
BEST_SCORE_GAME_TYPES: tuple[str, ...] = ("matching", "sorting", "duel")

# Monday..Sunday
WEEKDAY_FACTORS: tuple[float, ...] = (0.8, 1.0, 0.9, 1.1, 1.0, 0.5, 0.4)

CLASS_NAME_MAX_LENGTH: int = 50
INVITE_CODE_PREFIX: str = "KM"
INVITE_CODE_ALPHABET: str = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
INVITE_CODE_LENGTH: int = 6
INVITE_CODE_MAX_ATTEMPTS: int = 10

DIALOGUE_SCENARIOS: tuple[str, ...] = (
    "greeting",
    "pricing",
    "bargaining",
    "quantity",
    "payment",
    "thanks",
    "farewell",
)
