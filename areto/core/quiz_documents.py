"""Conversion between Quiz objects and their JSON document form."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from areto.constants.quiz_constants import PLACEHOLDER_ICON
from areto.core.models import Quiz, QuizQuestion, QuizSummary


def _format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    # fromisoformat() only accepts the "Z" suffix from Python 3.11 on
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def question_to_document(question: QuizQuestion) -> dict[str, Any]:
    return {
        "question": question.question,
        "options": list(question.options),
        "answer": question.answer,
    }


def question_from_document(document: dict[str, Any]) -> QuizQuestion:
    return QuizQuestion(
        question=document.get("question") or "",
        options=list(document.get("options") or []),
        answer=document.get("answer") or "",
    )


def quiz_to_document(quiz: Quiz) -> dict[str, Any]:
    """Serialize a quiz into a JSON-compatible dict with camelCase keys."""
    return {
        "id": quiz.id,
        "title": quiz.title,
        "icon": quiz.icon,
        "timeLimit": quiz.time_limit,
        "quizQuestions": [question_to_document(q) for q in quiz.quiz_questions],
        "totalPlays": quiz.total_plays,
        "averageSuccessRate": quiz.average_success_rate,
        "fastestCompletion": quiz.fastest_completion,
        "createdBy": quiz.created_by,
        "createdAt": _format_timestamp(quiz.created_at),
        "updatedAt": _format_timestamp(quiz.updated_at),
    }


def _icon(document: dict[str, Any]) -> str:
    icon = document.get("icon")
    return PLACEHOLDER_ICON if icon is None else icon


def quiz_from_document(document: dict[str, Any]) -> Quiz:
    """Build a quiz from a document produced by ``quiz_to_document`` or the API."""
    return Quiz(
        id=document.get("id"),
        title=document.get("title") or "",
        quiz_questions=[question_from_document(q) for q in document.get("quizQuestions") or []],
        created_by=document.get("createdBy") or "",
        icon=_icon(document),
        time_limit=document.get("timeLimit"),
        total_plays=document.get("totalPlays") or 0,
        average_success_rate=document.get("averageSuccessRate") or 0,
        fastest_completion=document.get("fastestCompletion"),
        created_at=_parse_timestamp(document.get("createdAt")),
        updated_at=_parse_timestamp(document.get("updatedAt")),
    )


def summary_from_document(document: dict[str, Any]) -> QuizSummary:
    """Build a list entry from the summary projection returned by the API."""
    return QuizSummary(
        id=document.get("id") or "",
        title=document.get("title") or "",
        icon=_icon(document),
        quiz_questions=[question_from_document(q) for q in document.get("quizQuestions") or []],
        total_plays=document.get("totalPlays") or 0,
        average_success_rate=document.get("averageSuccessRate") or 0,
        created_at=_parse_timestamp(document.get("createdAt")),
        created_by=document.get("createdBy") or "",
    )
