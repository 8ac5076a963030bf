"""Qt UI components for the Areto desktop client."""

from .dialog_helpers import (
    confirm_delete_quiz,
    confirm_discard_changes,
    show_error,
    show_info,
    show_toast,
    show_warning,
)
from .player_main_window import PlayerMainWindow
from .question_renderer import render_question, render_question_with_options

__all__ = [
    "PlayerMainWindow",
    "confirm_delete_quiz",
    "confirm_discard_changes",
    "show_error",
    "show_info",
    "show_toast",
    "show_warning",
    "render_question",
    "render_question_with_options",
]
