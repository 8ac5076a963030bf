from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from areto.client.results import ResultsAggregator, performance_message
from areto.client.session_context import QuizSessionContext
from areto.core.models import CompletionStats, RecordedAnswer
from conftest import make_quiz


def _context_with(correct: int, total: int, time_spent: int = 42) -> QuizSessionContext:
    context = QuizSessionContext()
    context.current_quiz = make_quiz(questions=total)
    context.answers = [
        RecordedAnswer(question_index=i, selected_answer="4" if i < correct else "3", is_correct=i < correct)
        for i in range(total)
    ]
    context.time_spent = time_spent
    return context


def test_summary_counts_and_percentage():
    result = ResultsAggregator(_context_with(2, 3), MagicMock()).summarize()

    assert result.correct_count == 2
    assert result.incorrect_count == 1
    assert result.total_answered == 3
    assert result.percentage == 67
    assert result.celebrate is False
    assert result.performance == "Good Effort! 💪"


@pytest.mark.parametrize(
    ("correct", "total", "celebrate"),
    [(7, 10, True), (69, 100, False), (1, 1, True), (0, 2, False)],
)
def test_celebration_threshold(correct, total, celebrate):
    assert ResultsAggregator(_context_with(correct, total), MagicMock()).summarize().celebrate is celebrate


@pytest.mark.parametrize(
    ("percentage", "message"),
    [(100, "Outstanding! 🎉"), (90, "Outstanding! 🎉"), (89, "Great Job! 👏"), (70, "Great Job! 👏"),
     (50, "Good Effort! 💪"), (49, "Keep Practicing! 📚"), (0, "Keep Practicing! 📚")],
)
def test_performance_tiers(percentage, message):
    assert performance_message(percentage) == message


def test_empty_state_without_answers_or_quiz():
    submit = MagicMock()
    empty = QuizSessionContext()
    assert ResultsAggregator(empty, submit).summarize() is None
    assert ResultsAggregator(empty, submit).submit_once() is None

    no_answers = QuizSessionContext()
    no_answers.current_quiz = make_quiz()
    assert ResultsAggregator(no_answers, submit).submit_once() is None
    submit.assert_not_called()


def test_submits_exactly_once():
    context = _context_with(1, 2, time_spent=17)
    submit = MagicMock(return_value=CompletionStats(total_plays=3, average_success_rate=50))
    aggregator = ResultsAggregator(context, submit)

    first = aggregator.submit_once()
    second = aggregator.submit_once()

    assert first == CompletionStats(total_plays=3, average_success_rate=50)
    assert second is None
    assert aggregator.submitted
    submit.assert_called_once_with(context.current_quiz.id, 1, 2, 17)


def test_failed_submission_is_not_retried():
    submit = MagicMock(side_effect=ConnectionError("offline"))
    aggregator = ResultsAggregator(_context_with(1, 1), submit)

    with pytest.raises(ConnectionError):
        aggregator.submit_once()
    assert aggregator.submit_once() is None
    assert submit.call_count == 1


def test_reset_clears_session():
    context = _context_with(1, 1)
    context.reset()
    assert context.current_quiz is None
    assert context.answers == []
    assert context.time_spent == 0


def test_asynchronous_submitter_is_still_called_once():
    calls = []
    aggregator = ResultsAggregator(_context_with(1, 2), lambda *args: calls.append(args))

    assert aggregator.submit_once() is None
    assert aggregator.submit_once() is None
    assert aggregator.submitted is True
    assert calls == [("0" * 32, 1, 2, 42)]
