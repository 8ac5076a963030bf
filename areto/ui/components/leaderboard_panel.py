"""Component ranking quizzes by plays and by success rate."""

from __future__ import annotations

import requests
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QVBoxLayout,
    QWidget,
)

from areto.client.api_client import ApiError, AretoApiClient
from areto.constants.quiz_constants import LEADERBOARD_SIZE
from areto.constants.ui_constants import (
    LEADERBOARD_HIGHEST_SUCCESS_TITLE,
    LEADERBOARD_MOST_PLAYED_TITLE,
)
from areto.core.services.scoreboard import (
    leaderboard_totals,
    rank_highest_success,
    rank_most_played,
)
from areto.ui.dialog_helpers import show_toast


class LeaderboardPanel(QWidget):
    def __init__(self, api_client: AretoApiClient, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        boards_row = QHBoxLayout()
        self.most_played_group = QGroupBox(f"{LEADERBOARD_MOST_PLAYED_TITLE} (top {LEADERBOARD_SIZE})", self)
        most_played_layout = QVBoxLayout()
        self.most_played_group.setLayout(most_played_layout)
        self.most_played_list = QListWidget(self)
        most_played_layout.addWidget(self.most_played_list)
        boards_row.addWidget(self.most_played_group)

        self.highest_success_group = QGroupBox(
            f"{LEADERBOARD_HIGHEST_SUCCESS_TITLE} (top {LEADERBOARD_SIZE})", self
        )
        highest_success_layout = QVBoxLayout()
        self.highest_success_group.setLayout(highest_success_layout)
        self.highest_success_list = QListWidget(self)
        highest_success_layout.addWidget(self.highest_success_list)
        boards_row.addWidget(self.highest_success_group)
        layout.addLayout(boards_row, stretch=1)

        self.totals_label = QLabel("", self)
        layout.addWidget(self.totals_label)

    def set_api_client(self, api_client: AretoApiClient) -> None:
        self.api_client = api_client

    def refresh(self) -> None:
        try:
            quizzes = self.api_client.get_all_quizzes()
        except (ApiError, requests.RequestException):
            show_toast(self, "Failed to load leaderboard")
            return

        self.most_played_list.clear()
        for rank, quiz in enumerate(rank_most_played(quizzes), start=1):
            self.most_played_list.addItem(f"{rank}. {quiz.icon} {quiz.title} ({quiz.total_plays} plays)")

        self.highest_success_list.clear()
        for rank, quiz in enumerate(rank_highest_success(quizzes), start=1):
            self.highest_success_list.addItem(
                f"{rank}. {quiz.icon} {quiz.title} ({quiz.average_success_rate}%)"
            )

        totals = leaderboard_totals(quizzes)
        self.totals_label.setText(
            f"Total quizzes: {totals.total_quizzes} · Total plays: {totals.total_plays} · "
            f"Average success rate: {totals.average_success_rate}%"
        )
