from __future__ import annotations

from datetime import datetime, timedelta, timezone

from areto.core.models import QuizSummary
from areto.core.services.scoreboard import (
    SortOrder,
    leaderboard_totals,
    rank_highest_success,
    rank_most_played,
    sort_quizzes,
)

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _summary(quiz_id: str, created_by: str = "bob", plays: int = 0, average: int = 0, age_days: int = 0) -> QuizSummary:
    return QuizSummary(
        id=quiz_id,
        title=quiz_id,
        icon="📝",
        quiz_questions=[],
        total_plays=plays,
        average_success_rate=average,
        created_at=BASE - timedelta(days=age_days),
        created_by=created_by,
    )


QUIZZES = [
    _summary("old-mine", created_by="alice", plays=5, average=40, age_days=10),
    _summary("new-other", plays=50, average=90, age_days=0),
    _summary("mid-other", plays=1, average=70, age_days=5),
    _summary("new-mine", created_by="alice", plays=12, average=55, age_days=1),
]


def _ids(quizzes):
    return [q.id for q in quizzes]


def test_my_quizzes_first_then_newest():
    ordered = sort_quizzes(QUIZZES, SortOrder.MY_QUIZZES, user_id="alice")
    assert _ids(ordered) == ["new-mine", "old-mine", "new-other", "mid-other"]


def test_my_quizzes_without_user_is_newest():
    assert _ids(sort_quizzes(QUIZZES, SortOrder.MY_QUIZZES)) == _ids(sort_quizzes(QUIZZES, SortOrder.NEWEST))


def test_newest_popular_most_played():
    assert _ids(sort_quizzes(QUIZZES, SortOrder.NEWEST)) == ["new-other", "new-mine", "mid-other", "old-mine"]
    assert _ids(sort_quizzes(QUIZZES, SortOrder.POPULAR)) == ["new-other", "mid-other", "new-mine", "old-mine"]
    assert _ids(sort_quizzes(QUIZZES, SortOrder.MOST_PLAYED)) == ["new-other", "new-mine", "old-mine", "mid-other"]


def test_sorting_does_not_mutate_input():
    original = list(QUIZZES)
    sort_quizzes(QUIZZES, SortOrder.POPULAR)
    assert QUIZZES == original


def test_leaderboards_are_capped_at_ten():
    many = [_summary(f"q{i}", plays=i, average=i) for i in range(15)]

    most_played = rank_most_played(many)
    highest = rank_highest_success(many)

    assert len(most_played) == 10
    assert most_played[0].id == "q14"
    assert highest[-1].id == "q5"


def test_leaderboard_totals():
    totals = leaderboard_totals(QUIZZES)
    assert totals.total_quizzes == 4
    assert totals.total_plays == 68
    # (40 + 90 + 70 + 55) / 4 = 63.75
    assert totals.average_success_rate == 64


def test_leaderboard_totals_empty():
    totals = leaderboard_totals([])
    assert (totals.total_quizzes, totals.total_plays, totals.average_success_rate) == (0, 0, 0)
