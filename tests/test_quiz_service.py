from __future__ import annotations

import pytest

from areto.core.errors import ForbiddenError, InvalidIdError, NotFoundError, StorageError, ValidationError
from areto.core.models import QuizDraft, QuizPatch
from areto.core.services.quiz_service import (
    DELETE_FORBIDDEN_MESSAGE,
    EDIT_FORBIDDEN_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    QUIZ_NOT_FOUND_MESSAGE,
)
from conftest import make_question

UNKNOWN_ID = "f" * 32


class TestCreateQuiz:
    def test_defaults_for_minimal_quiz(self, service):
        quiz = service.create_quiz(QuizDraft(title="JS Basics", quiz_questions=[make_question()]))

        assert quiz.created_by == "system"
        assert quiz.icon == "📝"
        assert quiz.time_limit is None
        assert quiz.total_plays == 0
        assert quiz.average_success_rate == 0
        assert quiz.fastest_completion is None
        assert len(quiz.id) == 32
        assert quiz.created_at is not None

    def test_keeps_question_count_and_options(self, service):
        questions = [make_question(question=f"Q{i}") for i in range(3)]
        quiz = service.create_quiz(QuizDraft(title="Three", quiz_questions=questions, created_by="bob"))

        stored = service.get_quiz(quiz.id)
        assert len(stored.quiz_questions) == 3
        assert all(len(q.options) == 4 for q in stored.quiz_questions)
        assert stored.created_by == "bob"

    def test_title_is_trimmed(self, service):
        quiz = service.create_quiz(QuizDraft(title="  Spaced  ", quiz_questions=[make_question()]))
        assert quiz.title == "Spaced"

    @pytest.mark.parametrize(
        "draft",
        [
            QuizDraft(quiz_questions=[make_question()]),
            QuizDraft(title="   ", quiz_questions=[make_question()]),
            QuizDraft(title="No questions"),
            QuizDraft(title="Empty questions", quiz_questions=[]),
        ],
    )
    def test_missing_title_or_questions(self, service, repository, draft):
        with pytest.raises(ValidationError, match=MISSING_FIELDS_MESSAGE):
            service.create_quiz(draft)
        assert repository.find_all() == []

    def test_time_limit_bounds(self, service):
        assert service.create_quiz(QuizDraft(title="a", quiz_questions=[make_question()], time_limit=5)).time_limit == 5
        assert service.create_quiz(QuizDraft(title="b", quiz_questions=[make_question()], time_limit=300)).time_limit == 300
        for value in (4, 301):
            with pytest.raises(ValidationError):
                service.create_quiz(QuizDraft(title="c", quiz_questions=[make_question()], time_limit=value))

    def test_rejects_question_with_three_options(self, service, repository):
        with pytest.raises(ValidationError):
            service.create_quiz(QuizDraft(title="bad", quiz_questions=[make_question(options=["1", "2", "3"])]))
        assert repository.find_all() == []


class TestReadQuizzes:
    def test_get_is_idempotent(self, service, owned_quiz):
        assert service.get_quiz(owned_quiz.id) == service.get_quiz(owned_quiz.id)

    def test_get_unknown_id(self, service):
        with pytest.raises(NotFoundError, match=QUIZ_NOT_FOUND_MESSAGE):
            service.get_quiz(UNKNOWN_ID)

    def test_get_malformed_id_is_storage_error(self, service):
        with pytest.raises(InvalidIdError):
            service.get_quiz("not-an-id")
        assert issubclass(InvalidIdError, StorageError)

    def test_list_rounds_average(self, service, repository, owned_quiz):
        stored = repository.find_by_id(owned_quiz.id)
        stored.average_success_rate = 66.5
        repository.save(stored)

        [summary] = service.list_quizzes()

        assert summary.id == owned_quiz.id
        assert summary.average_success_rate == 67
        assert summary.title == "JS Basics"
        assert len(summary.quiz_questions) == 2


class TestUpdateQuiz:
    def test_owner_can_update_fields(self, service, owned_quiz):
        updated = service.update_quiz(
            owned_quiz.id,
            QuizPatch(title="Renamed", icon="🧠", time_limit=60, quiz_questions=[make_question()]),
            "alice",
        )
        assert updated.title == "Renamed"
        assert updated.icon == "🧠"
        assert updated.time_limit == 60
        assert len(updated.quiz_questions) == 1
        assert updated.created_at == owned_quiz.created_at

    def test_omitted_fields_are_kept(self, service, owned_quiz):
        updated = service.update_quiz(owned_quiz.id, QuizPatch(title="   "), "alice")
        assert updated.title == owned_quiz.title
        assert updated.icon == owned_quiz.icon
        assert updated.quiz_questions == owned_quiz.quiz_questions

    def test_non_owner_is_forbidden_and_nothing_changes(self, service, owned_quiz):
        with pytest.raises(ForbiddenError, match=EDIT_FORBIDDEN_MESSAGE):
            service.update_quiz(owned_quiz.id, QuizPatch(title="Hijacked"), "mallory")
        with pytest.raises(ForbiddenError):
            service.update_quiz(owned_quiz.id, QuizPatch(title="Hijacked"), None)
        assert service.get_quiz(owned_quiz.id).title == "JS Basics"

    def test_invalid_patch_is_rejected_before_writing(self, service, owned_quiz):
        with pytest.raises(ValidationError):
            service.update_quiz(owned_quiz.id, QuizPatch(title="New", time_limit=301), "alice")
        with pytest.raises(ValidationError):
            service.update_quiz(owned_quiz.id, QuizPatch(quiz_questions=[]), "alice")
        assert service.get_quiz(owned_quiz.id).title == "JS Basics"

    def test_unknown_quiz(self, service):
        with pytest.raises(NotFoundError):
            service.update_quiz(UNKNOWN_ID, QuizPatch(title="x"), "alice")


class TestDeleteQuiz:
    def test_owner_deletes(self, service, owned_quiz):
        service.delete_quiz(owned_quiz.id, "alice")
        with pytest.raises(NotFoundError):
            service.get_quiz(owned_quiz.id)

    def test_non_owner_cannot_delete(self, service, owned_quiz):
        with pytest.raises(ForbiddenError, match=DELETE_FORBIDDEN_MESSAGE):
            service.delete_quiz(owned_quiz.id, "mallory")
        assert service.get_quiz(owned_quiz.id).id == owned_quiz.id

    def test_unknown_quiz(self, service):
        with pytest.raises(NotFoundError):
            service.delete_quiz(UNKNOWN_ID, "alice")


class TestCompleteQuiz:
    def test_first_completion(self, service, owned_quiz):
        stats = service.complete_quiz(owned_quiz.id, score=1, total_questions=3)
        assert stats.total_plays == 1
        assert stats.average_success_rate == 33

    def test_three_identical_completions(self, service, owned_quiz):
        for _ in range(3):
            stats = service.complete_quiz(owned_quiz.id, score=1, total_questions=2)
        assert stats.total_plays == 3
        assert stats.average_success_rate == 50
        stored = service.get_quiz(owned_quiz.id)
        assert stored.total_plays == 3
        assert stored.average_success_rate == 50

    def test_running_average_uses_incremented_play_count(self, service, owned_quiz):
        service.complete_quiz(owned_quiz.id, 2, 2)  # 100
        stats = service.complete_quiz(owned_quiz.id, 0, 2)  # (100 * 1 + 0) / 2
        assert stats.average_success_rate == 50
        stats = service.complete_quiz(owned_quiz.id, 2, 2)  # (50 * 2 + 100) / 3 = 66.7
        assert stats.average_success_rate == 67

    def test_time_spent_does_not_set_fastest_completion(self, service, owned_quiz):
        service.complete_quiz(owned_quiz.id, 2, 2, time_spent=12)
        assert service.get_quiz(owned_quiz.id).fastest_completion is None

    @pytest.mark.parametrize(("score", "total"), [(1, 0), (0, -1), (3, 2), (-1, 2)])
    def test_invalid_counts(self, service, owned_quiz, score, total):
        with pytest.raises(ValidationError):
            service.complete_quiz(owned_quiz.id, score, total)
        assert service.get_quiz(owned_quiz.id).total_plays == 0

    def test_unknown_quiz_checked_before_counts(self, service):
        with pytest.raises(NotFoundError):
            service.complete_quiz(UNKNOWN_ID, 1, 0)
