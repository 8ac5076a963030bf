"""Component for playing a quiz question by question."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QButtonGroup,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from areto.client.api_client import ApiError, AretoApiClient
from areto.client.quiz_taking import NoSelectionError, QuizTakingMachine, TakingState
from areto.client.session_context import QuizSessionContext
from areto.constants.quiz_constants import OPTIONS_PER_QUESTION, TIMER_DANGER_SECONDS, TIMER_WARNING_SECONDS
from areto.constants.ui_constants import (
    TAKING_LOADING_MESSAGE,
    TAKING_NEXT_BUTTON,
    TAKING_QUIT_BUTTON,
    TAKING_RESULTS_BUTTON,
    TAKING_SUBMIT_BUTTON,
    TICK_INTERVAL_MS,
    TIME_UP_MESSAGE,
)
from areto.core.models import Quiz, RecordedAnswer
from areto.ui.background import BackgroundCall, run_in_background
from areto.ui.dialog_helpers import show_toast
from areto.ui.question_renderer import render_question


class TakingPanel(QWidget):
    """UI component wrapping a ``QuizTakingMachine`` driven by a one-second timer."""

    def __init__(
        self,
        api_client: AretoApiClient,
        context: QuizSessionContext,
        on_finished: Callable[[], None],
        on_quit: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.on_finished = on_finished
        self.on_quit = on_quit
        self.machine = QuizTakingMachine(context)
        self._loading_quiz_id: str | None = None
        self._pending_call: BackgroundCall | None = None

        self._build_ui()
        self._configure_tick_timer()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet("font-weight: bold;")
        header_row.addWidget(self.title_label)
        header_row.addStretch()
        self.elapsed_label = QLabel("", self)
        header_row.addWidget(self.elapsed_label)
        self.timer_label = QLabel("", self)
        self.timer_label.setVisible(False)
        header_row.addWidget(self.timer_label)
        layout.addLayout(header_row)

        progress_row = QHBoxLayout()
        self.position_label = QLabel("", self)
        progress_row.addWidget(self.position_label)
        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        progress_row.addWidget(self.progress_bar, stretch=1)
        layout.addLayout(progress_row)

        self.question_view = QTextBrowser(self)
        layout.addWidget(self.question_view, stretch=1)

        options_grid = QGridLayout()
        self.option_group = QButtonGroup(self)
        self.option_group.setExclusive(True)
        self.option_buttons: list[QPushButton] = []
        for idx in range(OPTIONS_PER_QUESTION):
            button = QPushButton("", self)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, i=idx: self._handle_option_clicked(i))
            self.option_group.addButton(button, idx)
            options_grid.addWidget(button, idx // 2, idx % 2)
            self.option_buttons.append(button)
        layout.addLayout(options_grid)

        self.feedback_label = QLabel("", self)
        self.feedback_label.setAlignment(Qt.AlignCenter)
        self.feedback_label.setVisible(False)
        layout.addWidget(self.feedback_label)

        action_row = QHBoxLayout()
        self.quit_button = QPushButton(TAKING_QUIT_BUTTON, self)
        self.quit_button.clicked.connect(self._handle_quit)
        action_row.addWidget(self.quit_button)
        action_row.addStretch()
        self.submit_button = QPushButton(TAKING_SUBMIT_BUTTON, self)
        self.submit_button.clicked.connect(self._handle_submit)
        action_row.addWidget(self.submit_button)
        self.next_button = QPushButton(TAKING_NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        action_row.addWidget(self.next_button)
        layout.addLayout(action_row)

    def _configure_tick_timer(self) -> None:
        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self._handle_tick)

    def set_api_client(self, api_client: AretoApiClient) -> None:
        self.api_client = api_client

    def start_quiz(self, quiz_id: str) -> None:
        """Fetch ``quiz_id`` off the GUI thread and start playing it; ``on_quit`` runs if it cannot be played."""
        self.stop_session()
        self._loading_quiz_id = quiz_id
        self._show_loading()
        self._pending_call = run_in_background(
            self.api_client.get_quiz,
            quiz_id,
            on_success=self._handle_quiz_loaded,
            on_error=self._handle_load_failed,
        )

    def stop_session(self) -> None:
        """Cancel both timers and any pending load; used when leaving the view or closing the window."""
        self._loading_quiz_id = None
        self.tick_timer.stop()
        self.machine.stop()

    def _handle_quiz_loaded(self, quiz: Quiz) -> None:
        # A load that finishes after the player left is ignored
        if self._loading_quiz_id is None or quiz.id != self._loading_quiz_id:
            return
        self._loading_quiz_id = None
        self._pending_call = None
        if not quiz.quiz_questions:
            show_toast(self, "This quiz has no questions")
            self.on_quit()
            return

        self.machine.load(quiz)
        self.title_label.setText(f"{quiz.icon} {quiz.title}")
        self._display_question()
        self.tick_timer.start()

    def _handle_load_failed(self, exc: Exception) -> None:
        if self._loading_quiz_id is None:
            return
        self._loading_quiz_id = None
        self._pending_call = None
        if isinstance(exc, ApiError) and exc.is_not_found:
            show_toast(self, exc.message)
        else:
            show_toast(self, "Failed to load quiz")
        self.on_quit()

    def _show_loading(self) -> None:
        self.title_label.setText("")
        self.position_label.setText("")
        self.progress_bar.setValue(0)
        self.question_view.setPlainText(TAKING_LOADING_MESSAGE)
        for button in self.option_buttons:
            button.setText("")
            button.setEnabled(False)
            button.setStyleSheet("")
        self.feedback_label.setVisible(False)
        self.submit_button.setVisible(False)
        self.next_button.setVisible(False)
        self.elapsed_label.setText("")
        self.timer_label.setVisible(False)

    def _handle_tick(self) -> None:
        timed_out = self.machine.tick()
        self._update_timer_labels()
        if timed_out is not None:
            self._show_feedback(timed_out, timed_out=True)

    def _handle_option_clicked(self, index: int) -> None:
        question = self.machine.current_question
        if question is None or not self.machine.select_option(question.options[index]):
            self._sync_option_checks()

    def _handle_submit(self) -> None:
        try:
            answer = self.machine.submit()
        except NoSelectionError as exc:
            show_toast(self, str(exc))
            return
        self._show_feedback(answer, timed_out=False)

    def _handle_next(self) -> None:
        state = self.machine.advance()
        if state is TakingState.FINISHED:
            self.tick_timer.stop()
            self.on_finished()
            return
        self._display_question()

    def _handle_quit(self) -> None:
        self.stop_session()
        self.on_quit()

    def _display_question(self) -> None:
        question = self.machine.current_question
        quiz = self.machine.quiz
        if question is None or quiz is None:
            return
        self.question_view.setHtml(render_question(question.question))
        self.position_label.setText(
            f"Question {self.machine.question_index + 1} of {len(quiz.quiz_questions)}"
        )
        self.progress_bar.setValue(int(self.machine.progress * 100))
        for button, option in zip(self.option_buttons, question.options):
            button.setText(option)
            button.setEnabled(True)
            button.setStyleSheet("")
        self._sync_option_checks()
        self.feedback_label.setVisible(False)
        self.submit_button.setVisible(True)
        self.submit_button.setEnabled(True)
        self.next_button.setVisible(False)
        self._update_timer_labels()

    def _show_feedback(self, answer: RecordedAnswer, timed_out: bool) -> None:
        question = self.machine.current_question
        for button, option in zip(self.option_buttons, question.options):
            button.setEnabled(False)
            if option == question.answer:
                button.setStyleSheet("background-color: #16a34a; color: #fff;")
            elif option == answer.selected_answer:
                button.setStyleSheet("background-color: #dc2626; color: #fff;")

        if timed_out:
            self.feedback_label.setText(f"{TIME_UP_MESSAGE} The correct answer was: {question.answer}")
        elif answer.is_correct:
            self.feedback_label.setText("Correct! 🎉")
        else:
            self.feedback_label.setText(f"Incorrect. The correct answer was: {question.answer}")
        self.feedback_label.setVisible(True)

        self.submit_button.setVisible(False)
        self.next_button.setText(TAKING_RESULTS_BUTTON if self.machine.is_last_question else TAKING_NEXT_BUTTON)
        self.next_button.setVisible(True)
        self._update_timer_labels()

    def _sync_option_checks(self) -> None:
        selected = self.machine.selected_answer
        question = self.machine.current_question
        self.option_group.setExclusive(False)
        for button, option in zip(self.option_buttons, question.options if question else []):
            button.setChecked(selected is not None and option == selected)
        self.option_group.setExclusive(True)

    def _update_timer_labels(self) -> None:
        elapsed = self.machine.elapsed_seconds
        self.elapsed_label.setText(f"⏱ {elapsed // 60}:{elapsed % 60:02d}")

        seconds_left = self.machine.seconds_left
        if seconds_left is None:
            self.timer_label.setVisible(False)
            return
        self.timer_label.setVisible(True)
        self.timer_label.setText(f"{seconds_left}s")
        base_style = "padding: 2px 6px; border-radius: 4px;"
        if seconds_left <= TIMER_DANGER_SECONDS:
            self.timer_label.setStyleSheet(base_style + " color: #fff; background-color: #dc2626;")
        elif seconds_left <= TIMER_WARNING_SECONDS:
            self.timer_label.setStyleSheet(base_style + " color: #000; background-color: #facc15;")
        else:
            self.timer_label.setStyleSheet(base_style)
