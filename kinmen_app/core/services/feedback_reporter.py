"""Result reporting for the matching game."""

from __future__ import annotations

import logging

from kinmen_app.constants.ui_constants import RESULT_MESSAGE_TEMPLATE, RESULT_PERFECT_SUFFIX
from kinmen_app.core.models import ValidationResult

logger = logging.getLogger(__name__)


def format_result_message(result: ValidationResult) -> str:
    message = RESULT_MESSAGE_TEMPLATE.format(correct=result.correct_count, total=result.total)
    if result.is_perfect:
        message += RESULT_PERFECT_SUFFIX
    return message


class FeedbackReporter:
    """Presents a validation result to the player. Retains no state."""

    def report(self, result: ValidationResult) -> None:
        raise NotImplementedError


class LoggingFeedbackReporter(FeedbackReporter):
    """Reporter used when no display surface is attached."""

    def report(self, result: ValidationResult) -> None:
        logger.info(format_result_message(result))
