"""Score summary shown after a play-through, plus the one-off completion report."""

from __future__ import annotations

import logging
from typing import Callable

from areto.client.session_context import QuizSessionContext
from areto.constants.quiz_constants import CELEBRATION_THRESHOLD_PERCENT
from areto.core.models import CompletionStats, QuizResult
from areto.core.services.statistics import round_half_up

logger = logging.getLogger(__name__)

SubmitCompletion = Callable[[str, int, int, int], CompletionStats | None]


def performance_message(percentage: int) -> str:
    if percentage >= 90:
        return "Outstanding! 🎉"
    if percentage >= 70:
        return "Great Job! 👏"
    if percentage >= 50:
        return "Good Effort! 💪"
    return "Keep Practicing! 📚"


class ResultsAggregator:
    """Summarizes the answers in ``context`` and reports the attempt once.

    ``submit`` is called as ``submit(quiz_id, correct, total, elapsed_seconds)``
    and may return None when it reports asynchronously.
    """

    def __init__(self, context: QuizSessionContext, submit: SubmitCompletion) -> None:
        self._context = context
        self._submit = submit
        self._submitted = False

    @property
    def submitted(self) -> bool:
        return self._submitted

    def summarize(self) -> QuizResult | None:
        """Return the score breakdown, or None when there is nothing to show."""
        if not self._context.has_results():
            return None
        answers = list(self._context.answers)
        correct = sum(1 for answer in answers if answer.is_correct)
        total = len(answers)
        percentage = round_half_up(correct / total * 100)
        return QuizResult(
            correct_count=correct,
            total_answered=total,
            percentage=percentage,
            celebrate=percentage >= CELEBRATION_THRESHOLD_PERCENT,
            performance=performance_message(percentage),
            answers=answers,
        )

    def submit_once(self) -> CompletionStats | None:
        """Report the attempt on the first call with results; later calls do nothing."""
        if self._submitted:
            return None
        result = self.summarize()
        if result is None:
            return None
        # Set before calling out so a failing or re-entrant call is not repeated
        self._submitted = True
        quiz = self._context.current_quiz
        return self._submit(quiz.id, result.correct_count, result.total_answered, self._context.time_spent)
