"""Component showing the outcome of a finished play-through."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from areto.client.api_client import AretoApiClient
from areto.client.results import ResultsAggregator
from areto.client.session_context import QuizSessionContext
from areto.constants.ui_constants import (
    RESULTS_BACK_BUTTON,
    RESULTS_EMPTY_STATE,
    RESULTS_RETAKE_BUTTON,
)
from areto.core.models import CompletionStats
from areto.ui.background import BackgroundCall, run_in_background
from areto.ui.dialog_helpers import show_toast


class ResultsPanel(QWidget):
    """UI component for the results view; reports each attempt to the server once."""

    def __init__(
        self,
        api_client: AretoApiClient,
        context: QuizSessionContext,
        on_retake: Callable[[str], None],
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.context = context
        self.on_retake = on_retake
        self.on_back = on_back
        self._user_id = ""
        self._pending_call: BackgroundCall | None = None
        self._reporting_aggregator: ResultsAggregator | None = None
        self.aggregator = self._new_aggregator()

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.celebration_label = QLabel("🎊 🎉 🎊", self)
        self.celebration_label.setAlignment(Qt.AlignCenter)
        self.celebration_label.setStyleSheet("font-size: 28pt;")
        self.celebration_label.setVisible(False)
        layout.addWidget(self.celebration_label)

        self.performance_label = QLabel("", self)
        self.performance_label.setAlignment(Qt.AlignCenter)
        self.performance_label.setStyleSheet("font-size: 20pt; font-weight: bold;")
        layout.addWidget(self.performance_label)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setStyleSheet("font-size: 16pt;")
        layout.addWidget(self.score_label)

        self.stats_label = QLabel("", self)
        self.stats_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.stats_label)

        self.answers_list = QListWidget(self)
        layout.addWidget(self.answers_list, stretch=1)

        action_row = QHBoxLayout()
        action_row.addStretch()
        self.retake_button = QPushButton(RESULTS_RETAKE_BUTTON, self)
        self.retake_button.clicked.connect(self._handle_retake)
        action_row.addWidget(self.retake_button)
        self.back_button = QPushButton(RESULTS_BACK_BUTTON, self)
        self.back_button.clicked.connect(self._handle_back)
        action_row.addWidget(self.back_button)
        layout.addLayout(action_row)

    def _new_aggregator(self) -> ResultsAggregator:
        return ResultsAggregator(self.context, self._submit_completion)

    def _submit_completion(self, quiz_id: str, score: int, total: int, elapsed: int) -> None:
        self._reporting_aggregator = self.aggregator
        self._pending_call = run_in_background(
            self.api_client.complete_quiz,
            quiz_id,
            score,
            total,
            elapsed,
            self._user_id or None,
            on_success=self._handle_completion_saved,
            on_error=self._handle_completion_failed,
        )

    def _handle_completion_saved(self, stats: CompletionStats) -> None:
        self._pending_call = None
        # Stats from an earlier play-through are not shown
        if self._reporting_aggregator is not self.aggregator:
            return
        self.stats_label.setText(
            f"{self.stats_label.text()} · plays: {stats.total_plays} · "
            f"average: {stats.average_success_rate}%"
        )

    def _handle_completion_failed(self, exc: Exception) -> None:
        self._pending_call = None
        show_toast(self, "Failed to save quiz results")

    def set_api_client(self, api_client: AretoApiClient) -> None:
        self.api_client = api_client

    def set_user_id(self, user_id: str) -> None:
        self._user_id = user_id

    def begin_session(self) -> None:
        """Arm a fresh aggregator so the next results view submits once."""
        self._reporting_aggregator = None
        self.aggregator = self._new_aggregator()

    def show_results(self) -> None:
        result = self.aggregator.summarize()
        self.answers_list.clear()
        if result is None:
            self.celebration_label.setVisible(False)
            self.performance_label.setText(RESULTS_EMPTY_STATE)
            self.score_label.setText("")
            self.stats_label.setText("")
            self.retake_button.setVisible(False)
            return

        quiz = self.context.current_quiz
        self.celebration_label.setVisible(result.celebrate)
        self.performance_label.setText(result.performance)
        self.score_label.setText(
            f"{result.percentage}% · {result.correct_count} correct · {result.incorrect_count} incorrect"
        )
        elapsed = self.context.time_spent
        self.stats_label.setText(f"{quiz.icon} {quiz.title} · time: {elapsed // 60}:{elapsed % 60:02d}")
        for answer in result.answers:
            question = quiz.quiz_questions[answer.question_index]
            mark = "✔" if answer.is_correct else "✘"
            self.answers_list.addItem(
                f"{mark} Q{answer.question_index + 1}: {question.question}\n"
                f"    Your answer: {answer.selected_answer} · Correct answer: {question.answer}"
            )
        self.retake_button.setVisible(True)

        self.aggregator.submit_once()

    def _handle_retake(self) -> None:
        quiz = self.context.current_quiz
        self.context.reset()
        if quiz is not None and quiz.id:
            self.on_retake(quiz.id)
        else:
            self.on_back()

    def _handle_back(self) -> None:
        self.context.reset()
        self.on_back()
