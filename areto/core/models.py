"""Domain models for the quiz application."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from areto.constants.quiz_constants import PLACEHOLDER_ICON


@dataclass(slots=True)
class QuizQuestion:
    """Multiple-choice quiz question with exactly four options."""

    question: str
    options: list[str]
    answer: str


@dataclass(slots=True)
class Quiz:
    """A titled collection of questions plus its running statistics."""

    id: str | None
    title: str
    quiz_questions: list[QuizQuestion]
    created_by: str
    icon: str = PLACEHOLDER_ICON
    time_limit: int | None = None
    total_plays: int = 0
    average_success_rate: float = 0
    fastest_completion: float | None = None  # Declared but never populated
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(slots=True)
class QuizDraft:
    """Caller input for creating a quiz; every field may be omitted."""

    title: str | None = None
    icon: str | None = None
    quiz_questions: list[QuizQuestion] | None = None
    created_by: str | None = None
    time_limit: int | None = None


@dataclass(slots=True)
class QuizPatch:
    """Caller input for editing a quiz; omitted fields keep their stored value."""

    title: str | None = None
    icon: str | None = None
    quiz_questions: list[QuizQuestion] | None = None
    time_limit: int | None = None


@dataclass(slots=True)
class QuizSummary:
    """Projection of a quiz returned by the list operation."""

    id: str
    title: str
    icon: str
    quiz_questions: list[QuizQuestion]
    total_plays: int
    average_success_rate: int
    created_at: datetime | None
    created_by: str


@dataclass(slots=True)
class RecordedAnswer:
    """One answered (or timed out) question during a play-through."""

    question_index: int
    selected_answer: str
    is_correct: bool


@dataclass(slots=True)
class CompletionStats:
    """Statistics returned after a completed attempt."""

    total_plays: int
    average_success_rate: int


@dataclass(slots=True)
class QuizResult:
    """Score breakdown of a finished play-through."""

    correct_count: int
    total_answered: int
    percentage: int
    celebrate: bool
    performance: str
    answers: list[RecordedAnswer] = field(default_factory=list)

    @property
    def incorrect_count(self) -> int:
        return self.total_answered - self.correct_count
