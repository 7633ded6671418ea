"""Qt UI components for the mock test application."""

from .dialog_helpers import (
    confirm_delete_test,
    confirm_leave_session,
    confirm_submit,
    show_error,
    show_info,
    show_warning,
)
from .main_window import ExamMainWindow
from .question_renderer import render_question_page, render_review_page

__all__ = [
    "ExamMainWindow",
    "confirm_delete_test",
    "confirm_leave_session",
    "confirm_submit",
    "show_error",
    "show_info",
    "show_warning",
    "render_question_page",
    "render_review_page",
]
