"""Transient notification showing the matching-game result."""

from __future__ import annotations

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import QLabel, QWidget

from kinmen_app.constants.matching_constants import RESULT_TOAST_DURATION_MS
from kinmen_app.core.models import ValidationResult
from kinmen_app.core.services.feedback_reporter import FeedbackReporter, format_result_message
from kinmen_app.styling.color_palette import Theme
from kinmen_app.styling.styles import Styles


class ResultToast(QLabel):
    """Overlay label that hides itself after a fixed duration."""

    def __init__(self, parent: QWidget, duration_ms: int = RESULT_TOAST_DURATION_MS) -> None:
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setStyleSheet(Styles.get_toast_style(Theme.LIGHT))
        self.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        self.hide()

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(duration_ms)
        self._timer.timeout.connect(self.hide)

    def show_message(self, message: str) -> None:
        self.setText(message)
        self.adjustSize()
        parent = self.parentWidget()
        if parent is not None:
            x = (parent.width() - self.width()) // 2
            y = parent.height() - self.height() - 24
            self.move(max(x, 0), max(y, 0))
        self.raise_()
        self.show()
        self._timer.start()


class ToastFeedbackReporter(FeedbackReporter):
    """Shows matching results in a :class:`ResultToast`."""

    def __init__(self, toast: ResultToast) -> None:
        self._toast = toast

    def report(self, result: ValidationResult) -> None:
        self._toast.show_message(format_result_message(result))
