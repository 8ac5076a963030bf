"""Per-window state of the quiz currently being played."""

from __future__ import annotations

from areto.core.models import Quiz, RecordedAnswer


class QuizSessionContext:
    """Holds the active quiz, its recorded answers and the elapsed time.

    One instance is created by the main window and handed to both the
    quiz-taking machine and the results aggregator.
    """

    def __init__(self) -> None:
        self.current_quiz: Quiz | None = None
        self.answers: list[RecordedAnswer] = []
        self.time_spent: int = 0

    def has_results(self) -> bool:
        return self.current_quiz is not None and bool(self.answers)

    def reset(self) -> None:
        self.current_quiz = None
        self.answers = []
        self.time_spent = 0
