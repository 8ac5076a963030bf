"""Helper functions for common dialog patterns in the Areto UI."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import QMainWindow, QMessageBox, QWidget

from areto.constants.ui_constants import TOAST_DURATION_MS

logger = logging.getLogger(__name__)


def confirm_delete_quiz(parent: QWidget, quiz_title: str) -> bool:
    """Show confirmation dialog for deleting a quiz.

    Args:
        parent: Parent widget for the dialog
        quiz_title: Title of the quiz about to be deleted

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete \"{quiz_title}\"? This cannot be undone.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_discard_changes(parent: QWidget) -> bool:
    reply = QMessageBox.question(
        parent,
        "Unsaved Changes",
        "Leave the editor and discard your changes?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def show_toast(parent: QWidget, message: str) -> None:
    """Show a transient notice in the window's status bar.

    Falls back to a warning dialog when ``parent`` is not inside a main window.
    """
    logger.info("Notice: %s", message)
    window = parent.window()
    if isinstance(window, QMainWindow):
        window.statusBar().showMessage(message, TOAST_DURATION_MS)
    else:
        QMessageBox.warning(parent, "Areto", message)


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
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
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
