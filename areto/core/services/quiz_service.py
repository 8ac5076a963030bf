"""Quiz operations: validation, ownership checks and statistics updates."""

from __future__ import annotations

import logging

from areto.core.errors import ForbiddenError, NotFoundError, ValidationError
from areto.core.models import CompletionStats, Quiz, QuizDraft, QuizPatch, QuizSummary
from areto.core.services.quiz_repository import QuizRepository
from areto.core.services.statistics import round_half_up, success_rate, updated_average
from areto.core.validation import apply_defaults, validate_questions, validate_time_limit

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please include a title and at least one question."
QUIZ_NOT_FOUND_MESSAGE = "Quiz not found"
EDIT_FORBIDDEN_MESSAGE = "You do not have permission to edit this quiz"
DELETE_FORBIDDEN_MESSAGE = "You do not have permission to delete this quiz"


class QuizService:
    """Framework-agnostic implementation of the quiz endpoints.

    Every check that can fail runs before the repository is written to, and
    each operation touches at most one document.
    """

    def __init__(self, repository: QuizRepository) -> None:
        self._repository = repository

    @property
    def repository(self) -> QuizRepository:
        return self._repository

    def list_quizzes(self) -> list[QuizSummary]:
        return [
            QuizSummary(
                id=quiz.id,
                title=quiz.title,
                icon=quiz.icon,
                quiz_questions=quiz.quiz_questions,
                total_plays=quiz.total_plays,
                average_success_rate=round_half_up(quiz.average_success_rate or 0),
                created_at=quiz.created_at,
                created_by=quiz.created_by,
            )
            for quiz in self._repository.find_all()
        ]

    def get_quiz(self, quiz_id: str) -> Quiz:
        quiz = self._repository.find_by_id(quiz_id)
        if quiz is None:
            raise NotFoundError(QUIZ_NOT_FOUND_MESSAGE)
        return quiz

    def create_quiz(self, draft: QuizDraft) -> Quiz:
        if not draft.title or not draft.title.strip() or not draft.quiz_questions:
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        prepared = apply_defaults(draft)
        validate_time_limit(prepared.time_limit)
        validate_questions(prepared.quiz_questions)

        quiz = Quiz(
            id=None,
            title=prepared.title.strip(),
            icon=prepared.icon,
            quiz_questions=list(prepared.quiz_questions),
            created_by=prepared.created_by,
            time_limit=prepared.time_limit,
        )
        created = self._repository.insert(quiz)
        logger.info("Created quiz %s (%r) for %s", created.id, created.title, created.created_by)
        return created

    def update_quiz(self, quiz_id: str, patch: QuizPatch, caller_id: str | None) -> Quiz:
        quiz = self.get_quiz(quiz_id)
        if quiz.created_by != caller_id:
            raise ForbiddenError(EDIT_FORBIDDEN_MESSAGE)

        if patch.time_limit is not None:
            validate_time_limit(patch.time_limit)
        if patch.quiz_questions is not None:
            validate_questions(patch.quiz_questions)

        if patch.title and patch.title.strip():
            quiz.title = patch.title.strip()
        if patch.icon is not None:
            quiz.icon = patch.icon
        if patch.quiz_questions is not None:
            quiz.quiz_questions = list(patch.quiz_questions)
        if patch.time_limit is not None:
            quiz.time_limit = patch.time_limit

        updated = self._repository.save(quiz)
        logger.info("Updated quiz %s", quiz_id)
        return updated

    def delete_quiz(self, quiz_id: str, caller_id: str | None) -> None:
        quiz = self.get_quiz(quiz_id)
        if quiz.created_by != caller_id:
            raise ForbiddenError(DELETE_FORBIDDEN_MESSAGE)
        self._repository.delete_by_id(quiz_id)
        logger.info("Deleted quiz %s", quiz_id)

    def complete_quiz(
        self,
        quiz_id: str,
        score: int,
        total_questions: int,
        time_spent: float | None = None,
    ) -> CompletionStats:
        """Record one finished attempt and return the refreshed statistics."""
        quiz = self.get_quiz(quiz_id)
        if total_questions is None or total_questions <= 0:
            raise ValidationError("Total questions must be a positive number.")
        if score is None or not 0 <= score <= total_questions:
            raise ValidationError("Score must be between 0 and the number of questions.")

        attempt_rate = success_rate(score, total_questions)

        # The play count goes up first; the previous average is then weighted
        # by total_plays - 1.
        quiz.total_plays += 1
        quiz.average_success_rate = updated_average(
            quiz.average_success_rate or 0,
            quiz.total_plays,
            attempt_rate,
        )

        saved = self._repository.save(quiz)
        logger.info(
            "Quiz %s completed: %d/%d in %ss (plays=%d, average=%d%%)",
            quiz_id,
            score,
            total_questions,
            time_spent,
            saved.total_plays,
            saved.average_success_rate,
        )
        return CompletionStats(
            total_plays=saved.total_plays,
            average_success_rate=saved.average_success_rate,
        )
