"""Qt UI components for the course player."""

from .course_main_window import CourseMainWindow
from .dialog_helpers import show_error, show_info

__all__ = [
    "CourseMainWindow",
    "show_error",
    "show_info",
]
