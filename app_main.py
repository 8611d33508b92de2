"""Application entry point for the Kinmen course player."""

from __future__ import annotations

import socket
import sys

from PySide6.QtWidgets import QApplication

from kinmen_app.constants.course_constants import DEFAULT_STUDENT_USERNAME
from kinmen_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from kinmen_app.constants.ui_constants import COURSE_LOAD_ERROR_TITLE
from kinmen_app.core.content_loader import DEFAULT_COURSE_PATH, CourseContentError, load_course_from_file
from kinmen_app.core.progress_manager import ProgressManager
from kinmen_app.core.progress_sync import ProgressSync
from kinmen_app.server.api_server import start_api_server
from kinmen_app.ui.course_main_window import CourseMainWindow
from kinmen_app.ui.dialog_helpers import show_error
from kinmen_app.utils.logging_config import configure_logging


def _determine_api_url(port: int) -> str:
    """Best-effort determination of the local IP for the progress API URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Initialize logging, load the course, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting Kinmen course player...")

    app = QApplication(sys.argv)
    try:
        course = load_course_from_file(DEFAULT_COURSE_PATH)
    except CourseContentError as exc:
        logger.error("Could not load course: %s", exc)
        show_error(None, COURSE_LOAD_ERROR_TITLE, str(exc))
        sys.exit(1)

    progress_manager = ProgressManager()
    progress_manager.ensure_student(DEFAULT_STUDENT_USERNAME)
    start_api_server(progress_manager=progress_manager, course=course, host=DEFAULT_HOST, port=DEFAULT_PORT)
    api_url = _determine_api_url(DEFAULT_PORT)
    logger.info("Progress API available at %s", api_url)

    progress_sync = ProgressSync(progress_manager, DEFAULT_STUDENT_USERNAME)
    window = CourseMainWindow(course=course, progress_sync=progress_sync, student_url=api_url)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
