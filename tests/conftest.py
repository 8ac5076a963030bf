"""
Shared fixtures for the Areto test suite.
"""
from __future__ import annotations

import os

import pytest

from areto.core.models import Quiz, QuizDraft, QuizQuestion
from areto.core.services.quiz_repository import InMemoryQuizRepository
from areto.core.services.quiz_service import QuizService

# Keep a developer's .env or shell settings from leaking into tests.
for _name in list(os.environ):
    if _name.startswith("ARETO_"):
        del os.environ[_name]


def make_question(
    question: str = "2+2?",
    options: list[str] | None = None,
    answer: str = "4",
) -> QuizQuestion:
    return QuizQuestion(
        question=question,
        options=list(options) if options is not None else ["3", "4", "5", "6"],
        answer=answer,
    )


def make_quiz(
    questions: int = 2,
    time_limit: int | None = None,
    quiz_id: str = "0" * 32,
    title: str = "JS Basics",
) -> Quiz:
    return Quiz(
        id=quiz_id,
        title=title,
        quiz_questions=[make_question(question=f"Question {i + 1}?") for i in range(questions)],
        created_by="alice",
        time_limit=time_limit,
    )


@pytest.fixture
def repository() -> InMemoryQuizRepository:
    return InMemoryQuizRepository()


@pytest.fixture
def service(repository) -> QuizService:
    return QuizService(repository)


@pytest.fixture
def owned_quiz(service) -> Quiz:
    return service.create_quiz(
        QuizDraft(
            title="JS Basics",
            quiz_questions=[make_question(), make_question("Capital of France?", ["Rome", "Paris", "Oslo", "Bern"], "Paris")],
            created_by="alice",
        )
    )
