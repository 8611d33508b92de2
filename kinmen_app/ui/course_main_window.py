"""Qt main window presenting the course slides and the matching game."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from kinmen_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION
from kinmen_app.constants.ui_constants import (
    CHECK_MATCHING_BUTTON,
    MATCHING_SETUP_ERROR_TITLE,
    NEXT_SLIDE_BUTTON,
    PREV_SLIDE_BUTTON,
    RESET_MATCHING_BUTTON,
    SLIDE_COUNTER_TEMPLATE,
    STUDENT_URL_PLACEHOLDER,
    WINDOW_TITLE,
)
from kinmen_app.core.markdown_renderer import renderer
from kinmen_app.core.matching_game import MatchingGame, MatchingSetupError
from kinmen_app.core.models import Course, Slide
from kinmen_app.core.progress_sync import ProgressSync
from kinmen_app.styling.styles import Styles
from kinmen_app.ui.components.matching_canvas import MatchingCanvas
from kinmen_app.ui.components.result_toast import ResultToast, ToastFeedbackReporter
from kinmen_app.ui.dialog_helpers import show_error, show_info

logger = logging.getLogger(__name__)


class CourseMainWindow(QMainWindow):
    """Slide navigator; matching slides host the drag-to-connect game."""

    def __init__(
        self,
        course: Course,
        progress_sync: ProgressSync | None = None,
        student_url: str | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(f"{WINDOW_TITLE} - {course.title}")

        self.course = course
        self.progress_sync = progress_sync
        self.student_url = student_url or STUDENT_URL_PLACEHOLDER
        self._slide_index = 0

        self.matching_game = MatchingGame()
        if self.progress_sync is not None:
            self.matching_game.on_validated.append(self.progress_sync.record_matching_result)

        self._build_ui()
        self.matching_game.set_reporter(ToastFeedbackReporter(self.toast))
        self.setStyleSheet(Styles.get_main_window_style())
        self._show_slide(0)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel(self)
        self.title_label.setStyleSheet(Styles.get_title_label_style())
        header_row.addWidget(self.title_label, stretch=1)
        self.counter_label = QLabel(self)
        header_row.addWidget(self.counter_label)
        about_button = QPushButton("About", self)
        about_button.clicked.connect(self._show_about)
        header_row.addWidget(about_button)
        root_layout.addLayout(header_row)

        self.content_stack = QStackedWidget(self)
        self.notes_view = QTextBrowser(self)
        self.notes_view.setOpenExternalLinks(True)
        self.content_stack.addWidget(self.notes_view)

        matching_page = QWidget(self)
        matching_layout = QVBoxLayout()
        matching_page.setLayout(matching_layout)
        self.matching_canvas = MatchingCanvas(self.matching_game, matching_page)
        matching_layout.addWidget(self.matching_canvas, stretch=1)
        matching_buttons = QHBoxLayout()
        self.check_button = QPushButton(CHECK_MATCHING_BUTTON, matching_page)
        self.check_button.clicked.connect(self._handle_check_answers)
        matching_buttons.addWidget(self.check_button)
        self.reset_button = QPushButton(RESET_MATCHING_BUTTON, matching_page)
        self.reset_button.clicked.connect(self.matching_game.reset)
        matching_buttons.addWidget(self.reset_button)
        matching_layout.addLayout(matching_buttons)
        self.content_stack.addWidget(matching_page)
        self.matching_page = matching_page

        root_layout.addWidget(self.content_stack, stretch=1)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(PREV_SLIDE_BUTTON, self)
        self.prev_button.clicked.connect(self.show_previous_slide)
        nav_row.addWidget(self.prev_button)
        self.url_label = QLabel(f"Progress API: {self.student_url}", self)
        nav_row.addWidget(self.url_label, stretch=1)
        self.next_button = QPushButton(NEXT_SLIDE_BUTTON, self)
        self.next_button.clicked.connect(self.show_next_slide)
        nav_row.addWidget(self.next_button)
        root_layout.addLayout(nav_row)

        self.toast = ResultToast(central_widget)

    # --- Navigation ---

    def show_next_slide(self) -> None:
        if self._slide_index + 1 < self.course.slide_count():
            self._show_slide(self._slide_index + 1)

    def show_previous_slide(self) -> None:
        if self._slide_index > 0:
            self._show_slide(self._slide_index - 1)

    def _show_slide(self, index: int) -> None:
        slide = self.course.get_slide(index)
        self._slide_index = index
        self.title_label.setText(slide.title)
        self.counter_label.setText(
            SLIDE_COUNTER_TEMPLATE.format(current=index + 1, total=self.course.slide_count())
        )
        self.prev_button.setEnabled(index > 0)
        self.next_button.setEnabled(index + 1 < self.course.slide_count())

        # Leaving a slide always tears down any game in progress.
        self.matching_game.destroy()
        if slide.matching is not None and self._load_matching(slide):
            self.content_stack.setCurrentWidget(self.matching_page)
        else:
            self.notes_view.setHtml(renderer.render_fragment(slide.notes))
            self.content_stack.setCurrentWidget(self.notes_view)

    def _load_matching(self, slide: Slide) -> bool:
        try:
            self.matching_game.load_content(slide.matching)
        except MatchingSetupError as exc:
            logger.error("Slide %s has unusable matching data: %s", slide.id, exc)
            show_error(self, MATCHING_SETUP_ERROR_TITLE, str(exc))
            return False
        return True

    # --- Actions ---

    def _handle_check_answers(self) -> None:
        if self.matching_game.is_active():
            self.matching_game.check_answers()

    def _show_about(self) -> None:
        show_info(self, APP_NAME, f"{APP_NAME} {APP_VERSION}\n\n{APP_ABOUT_TEXT}\n\n{APP_LICENSE}")

    def closeEvent(self, event) -> None:
        self.matching_canvas.detach()
        self.matching_game.destroy()
        super().closeEvent(event)
