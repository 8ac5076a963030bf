"""Component listing every quiz with play, edit and delete actions."""

from __future__ import annotations

from typing import Callable

import requests
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from areto.client.api_client import ApiError, AretoApiClient
from areto.constants.ui_constants import (
    DASHBOARD_DELETE_BUTTON,
    DASHBOARD_EDIT_BUTTON,
    DASHBOARD_EMPTY_STATE,
    DASHBOARD_PLAY_BUTTON,
    DASHBOARD_REFRESH_BUTTON,
    SORT_LABELS,
)
from areto.core.models import QuizSummary
from areto.core.services.scoreboard import SortOrder, sort_quizzes
from areto.ui.dialog_helpers import confirm_delete_quiz, show_toast


class DashboardPanel(QWidget):
    """UI component showing the quiz catalogue."""

    def __init__(
        self,
        api_client: AretoApiClient,
        on_play: Callable[[str], None],
        on_edit: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.on_play = on_play
        self.on_edit = on_edit
        self._user_id = ""
        self._quizzes: list[QuizSummary] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        control_row = QHBoxLayout()
        control_row.addWidget(QLabel("Sort by:", self))
        self.sort_combo = QComboBox(self)
        for order in SortOrder:
            self.sort_combo.addItem(SORT_LABELS[order.value], userData=order)
        self.sort_combo.currentIndexChanged.connect(lambda _: self._render())
        control_row.addWidget(self.sort_combo)
        control_row.addStretch()

        self.refresh_button = QPushButton(DASHBOARD_REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh)
        control_row.addWidget(self.refresh_button)
        layout.addLayout(control_row)

        self.quiz_list = QListWidget(self)
        self.quiz_list.currentItemChanged.connect(lambda *_: self._update_buttons())
        self.quiz_list.itemDoubleClicked.connect(lambda _: self._handle_play())
        layout.addWidget(self.quiz_list, stretch=1)

        self.empty_label = QLabel(DASHBOARD_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setVisible(False)
        layout.addWidget(self.empty_label)

        action_row = QHBoxLayout()
        action_row.addStretch()
        self.play_button = QPushButton(DASHBOARD_PLAY_BUTTON, self)
        self.play_button.clicked.connect(self._handle_play)
        action_row.addWidget(self.play_button)

        self.edit_button = QPushButton(DASHBOARD_EDIT_BUTTON, self)
        self.edit_button.clicked.connect(self._handle_edit)
        action_row.addWidget(self.edit_button)

        self.delete_button = QPushButton(DASHBOARD_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete)
        action_row.addWidget(self.delete_button)
        layout.addLayout(action_row)

        self._update_buttons()

    def set_api_client(self, api_client: AretoApiClient) -> None:
        self.api_client = api_client

    def set_user_id(self, user_id: str) -> None:
        self._user_id = user_id
        self._render()

    def refresh(self) -> None:
        try:
            self._quizzes = self.api_client.get_all_quizzes()
        except (ApiError, requests.RequestException):
            show_toast(self, "Failed to load quizzes")
            return
        self._render()

    def _render(self) -> None:
        order = self.sort_combo.currentData() or SortOrder.MY_QUIZZES
        selected_id = self._selected_quiz_id()
        self.quiz_list.clear()
        for quiz in sort_quizzes(self._quizzes, order, self._user_id or None):
            owner = " (yours)" if self._user_id and quiz.created_by == self._user_id else ""
            text = (
                f"{quiz.icon}  {quiz.title}{owner}\n"
                f"{len(quiz.quiz_questions)} questions · {quiz.total_plays} plays · "
                f"{quiz.average_success_rate}% average"
            )
            item = QListWidgetItem(text)
            item.setData(Qt.UserRole, quiz.id)
            self.quiz_list.addItem(item)
            if quiz.id == selected_id:
                self.quiz_list.setCurrentItem(item)
        self.empty_label.setVisible(not self._quizzes)
        self._update_buttons()

    def _selected_quiz_id(self) -> str | None:
        item = self.quiz_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else None

    def _selected_quiz(self) -> QuizSummary | None:
        quiz_id = self._selected_quiz_id()
        return next((quiz for quiz in self._quizzes if quiz.id == quiz_id), None)

    def _update_buttons(self) -> None:
        quiz = self._selected_quiz()
        owned = quiz is not None and bool(self._user_id) and quiz.created_by == self._user_id
        self.play_button.setEnabled(quiz is not None)
        self.edit_button.setEnabled(owned)
        self.delete_button.setEnabled(owned)

    def _handle_play(self) -> None:
        quiz_id = self._selected_quiz_id()
        if quiz_id:
            self.on_play(quiz_id)

    def _handle_edit(self) -> None:
        quiz_id = self._selected_quiz_id()
        if quiz_id:
            self.on_edit(quiz_id)

    def _handle_delete(self) -> None:
        quiz = self._selected_quiz()
        if quiz is None or not confirm_delete_quiz(self, quiz.title):
            return
        try:
            message = self.api_client.delete_quiz(quiz.id, self._user_id)
        except ApiError as exc:
            show_toast(self, exc.message if exc.is_forbidden or exc.is_not_found else "Failed to delete quiz")
            return
        except requests.RequestException:
            show_toast(self, "Failed to delete quiz")
            return
        show_toast(self, message or "Quiz deleted successfully")
        self.refresh()
