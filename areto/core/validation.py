"""Validation and default rules for quiz documents."""

from __future__ import annotations

from dataclasses import replace

from areto.constants.quiz_constants import (
    MAX_TIME_LIMIT_SECONDS,
    MIN_TIME_LIMIT_SECONDS,
    OPTIONS_PER_QUESTION,
    PLACEHOLDER_ICON,
    SYSTEM_CREATOR,
)
from areto.core.errors import ValidationError
from areto.core.models import QuizDraft, QuizQuestion


def validate_time_limit(value: int | None) -> None:
    """Reject a per-question time limit outside the allowed range.

    ``None`` means the quiz is untimed and is always valid.
    """
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Time limit must be provided as an integer number of seconds.")
    if not MIN_TIME_LIMIT_SECONDS <= value <= MAX_TIME_LIMIT_SECONDS:
        raise ValidationError(
            f"Time limit must be between {MIN_TIME_LIMIT_SECONDS} and "
            f"{MAX_TIME_LIMIT_SECONDS} seconds."
        )


def validate_questions(questions: list[QuizQuestion] | None) -> None:
    """Reject an empty question list or any malformed question."""
    if not questions:
        raise ValidationError("Quiz must contain at least one question.")
    for position, question in enumerate(questions, start=1):
        if not question.question:
            raise ValidationError(f"Question {position} is missing its text.")
        if not question.answer:
            raise ValidationError(f"Question {position} is missing its answer.")
        if question.options is None or len(question.options) != OPTIONS_PER_QUESTION:
            raise ValidationError(f"Question {position} must have exactly {OPTIONS_PER_QUESTION} options.")


def apply_defaults(draft: QuizDraft) -> QuizDraft:
    """Return a copy of ``draft`` with omitted fields filled in."""
    return replace(
        draft,
        icon=PLACEHOLDER_ICON if draft.icon is None else draft.icon,
        created_by=draft.created_by or SYSTEM_CREATOR,
        time_limit=draft.time_limit or None,
    )


def validate_builder_form(title: str, questions: list[QuizQuestion]) -> None:
    """Check a quiz form before it is sent to the server.

    Stricter than the stored-document rules: every option must be filled in
    and the answer has to be one of the options.
    """
    if not title.strip():
        raise ValidationError("Please enter a quiz title")
    for question in questions:
        if (
            not question.question.strip()
            or any(not option.strip() for option in question.options)
            or not question.answer.strip()
        ):
            raise ValidationError("Please fill in all questions, options, and answers")
        if question.answer not in question.options:
            raise ValidationError("The correct answer must be one of the options")
