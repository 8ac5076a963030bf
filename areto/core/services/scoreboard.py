"""Ranking and sorting of quizzes by their statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from areto.constants.quiz_constants import LEADERBOARD_SIZE
from areto.core.models import QuizSummary
from areto.core.services.statistics import round_half_up

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class SortOrder(Enum):
    """Dashboard orderings."""

    MY_QUIZZES = "myQuizzes"
    NEWEST = "newest"
    POPULAR = "popular"
    MOST_PLAYED = "mostPlayed"


@dataclass(slots=True)
class LeaderboardTotals:
    """Aggregate figures shown under the leaderboard."""

    total_quizzes: int
    total_plays: int
    average_success_rate: int


def _created_key(quiz: QuizSummary) -> datetime:
    return quiz.created_at or _EPOCH


def sort_quizzes(
    quizzes: list[QuizSummary],
    order: SortOrder,
    user_id: str | None = None,
) -> list[QuizSummary]:
    """Return a sorted copy of ``quizzes``; ties keep their original order."""
    if order is SortOrder.MY_QUIZZES:
        newest_first = sorted(quizzes, key=_created_key, reverse=True)
        return sorted(newest_first, key=lambda q: user_id is None or q.created_by != user_id)
    if order is SortOrder.NEWEST:
        return sorted(quizzes, key=_created_key, reverse=True)
    if order is SortOrder.POPULAR:
        return sorted(quizzes, key=lambda q: -(q.average_success_rate or 0))
    if order is SortOrder.MOST_PLAYED:
        return sorted(quizzes, key=lambda q: -(q.total_plays or 0))
    return list(quizzes)


def rank_most_played(quizzes: list[QuizSummary], limit: int = LEADERBOARD_SIZE) -> list[QuizSummary]:
    """Return the top N quizzes by play count."""
    return sort_quizzes(quizzes, SortOrder.MOST_PLAYED)[:limit]


def rank_highest_success(quizzes: list[QuizSummary], limit: int = LEADERBOARD_SIZE) -> list[QuizSummary]:
    """Return the top N quizzes by average success rate."""
    return sort_quizzes(quizzes, SortOrder.POPULAR)[:limit]


def leaderboard_totals(quizzes: list[QuizSummary]) -> LeaderboardTotals:
    total_plays = sum(q.total_plays or 0 for q in quizzes)
    if quizzes:
        average = round_half_up(sum(q.average_success_rate or 0 for q in quizzes) / len(quizzes))
    else:
        average = 0
    return LeaderboardTotals(
        total_quizzes=len(quizzes),
        total_plays=total_plays,
        average_success_rate=average,
    )
