"""Component for creating a new quiz or editing one you own."""

from __future__ import annotations

from typing import Callable

import requests
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from areto.client.api_client import ApiError, AretoApiClient
from areto.constants.quiz_constants import (
    DEFAULT_TIME_LIMIT_SECONDS,
    MAX_TIME_LIMIT_SECONDS,
    MIN_TIME_LIMIT_SECONDS,
    OPTIONS_PER_QUESTION,
    PLACEHOLDER_ICON,
)
from areto.constants.ui_constants import (
    BUILDER_ADD_QUESTION_BUTTON,
    BUILDER_CANCEL_BUTTON,
    BUILDER_ICON_PLACEHOLDER,
    BUILDER_NEXT_BUTTON,
    BUILDER_PREV_BUTTON,
    BUILDER_QUESTION_PLACEHOLDER,
    BUILDER_REMOVE_QUESTION_BUTTON,
    BUILDER_SAVE_BUTTON,
    BUILDER_TIME_LIMIT_CHECKBOX,
    BUILDER_TITLE_PLACEHOLDER,
    NO_USER_ID_MESSAGE,
)
from areto.core.errors import ValidationError
from areto.core.models import QuizDraft, QuizPatch, QuizQuestion
from areto.core.services.quiz_service import EDIT_FORBIDDEN_MESSAGE
from areto.core.validation import validate_builder_form
from areto.ui.dialog_helpers import confirm_discard_changes, show_toast
from areto.ui.question_renderer import render_question_with_options

_OPTION_LABELS = ("A", "B", "C", "D")


def _blank_question() -> QuizQuestion:
    return QuizQuestion(question="", options=[""] * OPTIONS_PER_QUESTION, answer="")


class BuilderPanel(QWidget):
    """UI component editing a quiz one question at a time."""

    def __init__(
        self,
        api_client: AretoApiClient,
        on_saved: Callable[[], None],
        on_cancel: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.api_client = api_client
        self.on_saved = on_saved
        self.on_cancel = on_cancel
        self._user_id = ""
        self._editing_quiz_id: str | None = None
        self._questions: list[QuizQuestion] = [_blank_question()]
        self._current_index = 0
        self._has_unsaved_changes = False
        self._populating = False

        self._build_ui()
        self._show_question(0)

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.heading_label = QLabel("Create Quiz", self)
        layout.addWidget(self.heading_label)

        # Quiz details
        details_row = QHBoxLayout()
        self.icon_input = QLineEdit(self)
        self.icon_input.setPlaceholderText(BUILDER_ICON_PLACEHOLDER)
        self.icon_input.setMaximumWidth(120)
        self.icon_input.textChanged.connect(self._on_input_changed)
        details_row.addWidget(self.icon_input)

        self.title_input = QLineEdit(self)
        self.title_input.setPlaceholderText(BUILDER_TITLE_PLACEHOLDER)
        self.title_input.textChanged.connect(self._on_input_changed)
        details_row.addWidget(self.title_input, stretch=1)
        layout.addLayout(details_row)

        # Time limit
        time_limit_row = QHBoxLayout()
        self.time_limit_checkbox = QCheckBox(BUILDER_TIME_LIMIT_CHECKBOX, self)
        self.time_limit_checkbox.toggled.connect(self._handle_time_limit_toggle)
        time_limit_row.addWidget(self.time_limit_checkbox)

        self.time_limit_spinbox = QSpinBox(self)
        self.time_limit_spinbox.setRange(MIN_TIME_LIMIT_SECONDS, MAX_TIME_LIMIT_SECONDS)
        self.time_limit_spinbox.setSingleStep(5)
        self.time_limit_spinbox.setSuffix(" s")
        self.time_limit_spinbox.setEnabled(False)
        self.time_limit_spinbox.setValue(DEFAULT_TIME_LIMIT_SECONDS)
        self.time_limit_spinbox.valueChanged.connect(lambda _: self._on_input_changed())
        time_limit_row.addWidget(self.time_limit_spinbox)
        time_limit_row.addStretch()
        layout.addLayout(time_limit_row)

        # Question navigation
        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(BUILDER_PREV_BUTTON, self)
        self.prev_button.clicked.connect(lambda: self._navigate(-1))
        nav_row.addWidget(self.prev_button)

        self.position_label = QLabel("", self)
        nav_row.addWidget(self.position_label)

        self.next_button = QPushButton(BUILDER_NEXT_BUTTON, self)
        self.next_button.clicked.connect(lambda: self._navigate(1))
        nav_row.addWidget(self.next_button)
        nav_row.addStretch()

        self.add_button = QPushButton(BUILDER_ADD_QUESTION_BUTTON, self)
        self.add_button.clicked.connect(self._handle_add_question)
        nav_row.addWidget(self.add_button)

        self.remove_button = QPushButton(BUILDER_REMOVE_QUESTION_BUTTON, self)
        self.remove_button.clicked.connect(self._handle_remove_question)
        nav_row.addWidget(self.remove_button)
        layout.addLayout(nav_row)

        # Question input
        self.question_input = QPlainTextEdit(self)
        self.question_input.setPlaceholderText(BUILDER_QUESTION_PLACEHOLDER)
        self.question_input.setMaximumHeight(120)
        self.question_input.textChanged.connect(self._on_input_changed)
        layout.addWidget(self.question_input)

        # Options input
        options_row = QHBoxLayout()
        self.option_inputs: list[QLineEdit] = []
        for label in _OPTION_LABELS:
            option_input = QLineEdit(self)
            option_input.setPlaceholderText(f"Option {label}")
            option_input.textChanged.connect(self._on_option_changed)
            options_row.addWidget(option_input)
            self.option_inputs.append(option_input)
        layout.addLayout(options_row)

        # Correct answer is picked from the options
        answer_row = QHBoxLayout()
        answer_row.addWidget(QLabel("Correct answer:", self))
        self.answer_combo = QComboBox(self)
        self.answer_combo.currentIndexChanged.connect(lambda _: self._on_input_changed())
        answer_row.addWidget(self.answer_combo, stretch=1)
        layout.addLayout(answer_row)

        self.preview_view = QTextBrowser(self)
        layout.addWidget(self.preview_view, stretch=1)

        action_row = QHBoxLayout()
        action_row.addStretch()
        self.cancel_button = QPushButton(BUILDER_CANCEL_BUTTON, self)
        self.cancel_button.clicked.connect(self._handle_cancel)
        action_row.addWidget(self.cancel_button)

        self.save_button = QPushButton(BUILDER_SAVE_BUTTON, self)
        self.save_button.clicked.connect(self._handle_save)
        action_row.addWidget(self.save_button)
        layout.addLayout(action_row)

    def set_api_client(self, api_client: AretoApiClient) -> None:
        self.api_client = api_client

    def set_user_id(self, user_id: str) -> None:
        self._user_id = user_id

    def start_new(self) -> None:
        """Reset the form for a brand new quiz."""
        self._editing_quiz_id = None
        self.heading_label.setText("Create Quiz")
        self._populate_form("", "", None, [_blank_question()])

    def load_for_edit(self, quiz_id: str) -> bool:
        """Load ``quiz_id`` into the form; False when it cannot be edited."""
        try:
            quiz = self.api_client.get_quiz(quiz_id)
        except ApiError as exc:
            show_toast(self, exc.message if exc.is_not_found else "Failed to load quiz")
            return False
        except requests.RequestException:
            show_toast(self, "Failed to load quiz")
            return False
        if not self._user_id or quiz.created_by != self._user_id:
            show_toast(self, EDIT_FORBIDDEN_MESSAGE)
            return False

        self._editing_quiz_id = quiz.id
        self.heading_label.setText(f"Edit Quiz: {quiz.title}")
        self._populate_form(quiz.title, quiz.icon, quiz.time_limit, quiz.quiz_questions)
        return True

    def _populate_form(
        self,
        title: str,
        icon: str,
        time_limit: int | None,
        questions: list[QuizQuestion],
    ) -> None:
        self._populating = True
        self.title_input.setText(title)
        self.icon_input.setText(icon)
        if time_limit:
            self.time_limit_spinbox.setValue(time_limit)
            self.time_limit_checkbox.setChecked(True)
        else:
            self.time_limit_spinbox.setValue(DEFAULT_TIME_LIMIT_SECONDS)
            self.time_limit_checkbox.setChecked(False)
        self._questions = [
            QuizQuestion(question=q.question, options=list(q.options), answer=q.answer) for q in questions
        ] or [_blank_question()]
        self._populating = False
        self._show_question(0)
        self._has_unsaved_changes = False

    def _on_input_changed(self) -> None:
        if self._populating:
            return
        self._has_unsaved_changes = True
        self._store_current_question()
        self._refresh_preview()

    def _on_option_changed(self) -> None:
        if self._populating:
            return
        self._refresh_answer_choices(self.answer_combo.currentText())
        self._on_input_changed()

    def _handle_time_limit_toggle(self, checked: bool) -> None:
        self.time_limit_spinbox.setEnabled(checked)
        self._on_input_changed()

    def _refresh_answer_choices(self, selected: str) -> None:
        was_populating = self._populating
        self._populating = True
        self.answer_combo.clear()
        self.answer_combo.addItem("Select…", userData=None)
        for field in self.option_inputs:
            text = field.text()
            if text.strip():
                self.answer_combo.addItem(text, userData=text)
        index = self.answer_combo.findData(selected) if selected else -1
        self.answer_combo.setCurrentIndex(max(index, 0))
        self._populating = was_populating

    def _store_current_question(self) -> None:
        answer = self.answer_combo.currentData()
        self._questions[self._current_index] = QuizQuestion(
            question=self.question_input.toPlainText(),
            options=[field.text() for field in self.option_inputs],
            answer=answer or "",
        )

    def _show_question(self, index: int) -> None:
        self._current_index = index
        question = self._questions[index]
        self._populating = True
        self.question_input.setPlainText(question.question)
        for field, text in zip(self.option_inputs, question.options):
            field.setText(text)
        self._refresh_answer_choices(question.answer)
        self._populating = False
        self.position_label.setText(f"Question {index + 1} of {len(self._questions)}")
        self.prev_button.setEnabled(index > 0)
        self.next_button.setEnabled(index < len(self._questions) - 1)
        self.remove_button.setEnabled(len(self._questions) > 1)
        self._refresh_preview()

    def _navigate(self, step: int) -> None:
        self._store_current_question()
        target = max(0, min(len(self._questions) - 1, self._current_index + step))
        self._show_question(target)

    def _handle_add_question(self) -> None:
        self._store_current_question()
        self._questions.append(_blank_question())
        self._has_unsaved_changes = True
        self._show_question(len(self._questions) - 1)

    def _handle_remove_question(self) -> None:
        if len(self._questions) <= 1:
            return
        del self._questions[self._current_index]
        self._has_unsaved_changes = True
        self._show_question(min(self._current_index, len(self._questions) - 1))

    def _refresh_preview(self) -> None:
        options = [field.text() for field in self.option_inputs]
        html = render_question_with_options(self.question_input.toPlainText(), options)
        self.preview_view.setHtml(html)

    def _time_limit(self) -> int | None:
        if not self.time_limit_checkbox.isChecked():
            return None
        return int(self.time_limit_spinbox.value())

    def _handle_save(self) -> None:
        if not self._user_id:
            show_toast(self, NO_USER_ID_MESSAGE)
            return
        self._store_current_question()
        title = self.title_input.text()
        try:
            validate_builder_form(title, self._questions)
        except ValidationError as exc:
            show_toast(self, str(exc))
            return

        icon = self.icon_input.text().strip() or PLACEHOLDER_ICON
        questions = [
            QuizQuestion(question=q.question.strip(), options=[o.strip() for o in q.options], answer=q.answer.strip())
            for q in self._questions
        ]
        try:
            if self._editing_quiz_id is None:
                self.api_client.create_quiz(
                    QuizDraft(
                        title=title.strip(),
                        icon=icon,
                        quiz_questions=questions,
                        created_by=self._user_id,
                        time_limit=self._time_limit(),
                    )
                )
                message = "Quiz created successfully!"
            else:
                self.api_client.update_quiz(
                    self._editing_quiz_id,
                    QuizPatch(title=title.strip(), icon=icon, quiz_questions=questions, time_limit=self._time_limit()),
                    self._user_id,
                )
                message = "Quiz updated successfully!"
        except ApiError as exc:
            show_toast(self, exc.message if exc.is_forbidden or exc.is_not_found else "Failed to save quiz")
            return
        except requests.RequestException:
            show_toast(self, "Failed to save quiz")
            return

        self._has_unsaved_changes = False
        show_toast(self, message)
        self.on_saved()

    def _handle_cancel(self) -> None:
        if self._has_unsaved_changes and not confirm_discard_changes(self):
            return
        self._has_unsaved_changes = False
        self.on_cancel()
