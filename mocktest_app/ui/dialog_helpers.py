"""Helper functions for the message boxes used across the exam UI."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMessageBox, QWidget


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    """Apply font size to a widget when requested."""
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def _ask(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_delete_test(parent: QWidget, test_title: str) -> bool:
    """Ask before removing a custom test from the catalog.

    Args:
        parent: Parent widget for the dialog
        test_title: Title shown in the prompt

    Returns:
        True if user confirmed, False otherwise
    """
    return _ask(parent, "Confirm Delete", f"Delete '{test_title}'? This cannot be undone.")


def confirm_submit(parent: QWidget, unanswered: int, marked_for_review: int) -> bool:
    """Ask before submitting, mentioning unanswered and flagged questions.

    Returns:
        True if user confirmed, False otherwise
    """
    details: list[str] = []
    if unanswered:
        details.append(f"{unanswered} question(s) are unanswered.")
    if marked_for_review:
        details.append(f"{marked_for_review} question(s) are marked for review.")
    details.append("Submit the test now?")
    return _ask(parent, "Submit Test", "\n".join(details))


def confirm_leave_session(parent: QWidget) -> bool:
    """Ask before abandoning a running test. The attempt is discarded."""
    return _ask(
        parent,
        "Leave Test",
        "A test is in progress. Leaving now discards this attempt. Continue?",
    )


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Information message
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog."""
    QMessageBox.warning(parent, title, message)
