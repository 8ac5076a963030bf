"""Request and response schemas for the quiz API (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from areto.core.models import (
    CompletionStats,
    Quiz,
    QuizDraft,
    QuizPatch,
    QuizQuestion,
    QuizSummary,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuestionPayload(CamelModel):
    """Incoming question; presence of fields is checked by the service."""

    question: str | None = None
    options: list[str] | None = None
    answer: str | None = None

    def to_question(self) -> QuizQuestion:
        return QuizQuestion(
            question=self.question or "",
            options=list(self.options or []),
            answer=self.answer or "",
        )


def _to_questions(payloads: list[QuestionPayload] | None) -> list[QuizQuestion] | None:
    if payloads is None:
        return None
    return [payload.to_question() for payload in payloads]


class QuizCreatePayload(CamelModel):
    title: str | None = None
    icon: str | None = None
    quiz_questions: list[QuestionPayload] | None = None
    created_by: str | None = None
    time_limit: int | None = None

    def to_draft(self) -> QuizDraft:
        return QuizDraft(
            title=self.title,
            icon=self.icon,
            quiz_questions=_to_questions(self.quiz_questions),
            created_by=self.created_by,
            time_limit=self.time_limit,
        )


class QuizUpdatePayload(CamelModel):
    title: str | None = None
    icon: str | None = None
    quiz_questions: list[QuestionPayload] | None = None
    time_limit: int | None = None
    user_id: str | None = None

    def to_patch(self) -> QuizPatch:
        return QuizPatch(
            title=self.title,
            icon=self.icon,
            quiz_questions=_to_questions(self.quiz_questions),
            time_limit=self.time_limit,
        )


class OwnerPayload(CamelModel):
    user_id: str | None = None


class CompletePayload(CamelModel):
    score: int
    total_questions: int
    time_spent: float | None = None
    user_id: str | None = None


class QuestionOut(CamelModel):
    question: str
    options: list[str]
    answer: str

    @classmethod
    def from_question(cls, question: QuizQuestion) -> "QuestionOut":
        return cls(question=question.question, options=list(question.options), answer=question.answer)


class QuizOut(CamelModel):
    id: str
    title: str
    icon: str
    time_limit: int | None = None
    quiz_questions: list[QuestionOut]
    total_plays: int
    average_success_rate: int | float
    fastest_completion: float | None = None
    created_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "QuizOut":
        return cls(
            id=quiz.id,
            title=quiz.title,
            icon=quiz.icon,
            time_limit=quiz.time_limit,
            quiz_questions=[QuestionOut.from_question(q) for q in quiz.quiz_questions],
            total_plays=quiz.total_plays,
            average_success_rate=quiz.average_success_rate,
            fastest_completion=quiz.fastest_completion,
            created_by=quiz.created_by,
            created_at=quiz.created_at,
            updated_at=quiz.updated_at,
        )


class QuizSummaryOut(CamelModel):
    id: str
    title: str
    icon: str
    quiz_questions: list[QuestionOut]
    total_plays: int
    average_success_rate: int
    created_at: datetime | None = None
    created_by: str

    @classmethod
    def from_summary(cls, summary: QuizSummary) -> "QuizSummaryOut":
        return cls(
            id=summary.id,
            title=summary.title,
            icon=summary.icon,
            quiz_questions=[QuestionOut.from_question(q) for q in summary.quiz_questions],
            total_plays=summary.total_plays,
            average_success_rate=summary.average_success_rate,
            created_at=summary.created_at,
            created_by=summary.created_by,
        )


class CompletionOut(CamelModel):
    message: str = "Quiz completed successfully"
    total_plays: int
    average_success_rate: int

    @classmethod
    def from_stats(cls, stats: CompletionStats) -> "CompletionOut":
        return cls(total_plays=stats.total_plays, average_success_rate=stats.average_success_rate)


class MessageOut(BaseModel):
    message: str
