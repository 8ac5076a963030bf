"""State machine driving a single play-through of a quiz."""

from __future__ import annotations

from enum import Enum
import logging

from areto.client.session_context import QuizSessionContext
from areto.client.timers import CountdownTimer, ElapsedTimer
from areto.constants.quiz_constants import NO_ANSWER
from areto.core.models import Quiz, QuizQuestion, RecordedAnswer

logger = logging.getLogger(__name__)


class TakingState(Enum):
    LOADING = "loading"
    ANSWERING = "answering"
    FEEDBACK = "feedback"
    FINISHED = "finished"


class NoSelectionError(Exception):
    """Raised when an answer is submitted before an option was chosen."""

    def __init__(self) -> None:
        super().__init__("Please select an answer")


class QuizTakingMachine:
    """Moves through ANSWERING and FEEDBACK for each question, then FINISHED.

    The owner calls ``tick`` once per second. The per-question countdown only
    runs while answering a timed quiz; the elapsed timer runs from ``load``
    until the session finishes.
    """

    def __init__(self, context: QuizSessionContext) -> None:
        self._context = context
        self._state = TakingState.LOADING
        self._quiz: Quiz | None = None
        self._question_index = 0
        self._selected_answer: str | None = None
        self._answers: list[RecordedAnswer] = []
        self._countdown = CountdownTimer()
        self._elapsed = ElapsedTimer()

    @property
    def state(self) -> TakingState:
        return self._state

    @property
    def quiz(self) -> Quiz | None:
        return self._quiz

    @property
    def question_index(self) -> int:
        return self._question_index

    @property
    def current_question(self) -> QuizQuestion | None:
        if self._quiz is None or self._state is TakingState.FINISHED:
            return None
        return self._quiz.quiz_questions[self._question_index]

    @property
    def selected_answer(self) -> str | None:
        return self._selected_answer

    @property
    def seconds_left(self) -> int | None:
        if self._quiz is None or not self._quiz.time_limit:
            return None
        return self._countdown.seconds_left

    @property
    def timer_expired(self) -> bool:
        return self._countdown.expired

    @property
    def is_last_question(self) -> bool:
        return self._quiz is not None and self._question_index == len(self._quiz.quiz_questions) - 1

    @property
    def progress(self) -> float:
        """Fraction of questions reached, counting the current one."""
        if not self._quiz or not self._quiz.quiz_questions:
            return 0.0
        return (self._question_index + 1) / len(self._quiz.quiz_questions)

    @property
    def answers(self) -> list[RecordedAnswer]:
        return list(self._answers)

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed.elapsed_seconds

    def load(self, quiz: Quiz) -> None:
        if not quiz.quiz_questions:
            raise ValueError("Cannot play a quiz without questions.")
        self.stop()
        self._context.reset()
        self._context.current_quiz = quiz
        self._quiz = quiz
        self._answers = []
        self._elapsed.start()
        self._enter_answering(0)
        logger.info("Started quiz %s (%d questions)", quiz.id, len(quiz.quiz_questions))

    def select_option(self, option: str) -> bool:
        """Select ``option`` for the current question; False when selection is closed."""
        if self._state is not TakingState.ANSWERING or self._countdown.expired:
            return False
        self._selected_answer = option
        return True

    def submit(self) -> RecordedAnswer:
        if self._state is not TakingState.ANSWERING:
            raise RuntimeError("No question is awaiting an answer.")
        if self._selected_answer is None:
            raise NoSelectionError()
        question = self.current_question
        return self._record(self._selected_answer, self._selected_answer == question.answer)

    def tick(self) -> RecordedAnswer | None:
        """Advance both timers one second; returns the answer recorded on timeout."""
        self._elapsed.tick()
        self._context.time_spent = self._elapsed.elapsed_seconds
        if self._state is not TakingState.ANSWERING:
            return None
        if self._countdown.tick():
            logger.debug("Time ran out on question %d", self._question_index)
            return self._record(self._selected_answer or NO_ANSWER, False)
        return None

    def advance(self) -> TakingState:
        """Move from FEEDBACK to the next question, or to FINISHED after the last one."""
        if self._state is not TakingState.FEEDBACK:
            raise RuntimeError("Answer the current question before moving on.")
        if self.is_last_question:
            self._finish()
        else:
            self._enter_answering(self._question_index + 1)
        return self._state

    def stop(self) -> None:
        self._countdown.stop()
        self._elapsed.stop()

    def _enter_answering(self, index: int) -> None:
        self._question_index = index
        self._selected_answer = None
        self._state = TakingState.ANSWERING
        if self._quiz.time_limit:
            self._countdown.start(self._quiz.time_limit)
        else:
            self._countdown.clear()

    def _record(self, selected: str, is_correct: bool) -> RecordedAnswer:
        self._countdown.stop()
        answer = RecordedAnswer(
            question_index=self._question_index,
            selected_answer=selected,
            is_correct=is_correct,
        )
        self._answers.append(answer)
        self._state = TakingState.FEEDBACK
        return answer

    def _finish(self) -> None:
        self.stop()
        self._state = TakingState.FINISHED
        self._context.answers = list(self._answers)
        self._context.time_spent = self._elapsed.elapsed_seconds
        logger.info(
            "Finished quiz %s: %d/%d correct in %ds",
            self._quiz.id,
            sum(1 for a in self._answers if a.is_correct),
            len(self._answers),
            self._elapsed.elapsed_seconds,
        )
