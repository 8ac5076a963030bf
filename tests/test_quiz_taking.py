from __future__ import annotations

import pytest

from areto.client.quiz_taking import NoSelectionError, QuizTakingMachine, TakingState
from areto.client.session_context import QuizSessionContext
from areto.core.models import RecordedAnswer
from conftest import make_quiz


@pytest.fixture
def context() -> QuizSessionContext:
    return QuizSessionContext()


@pytest.fixture
def machine(context) -> QuizTakingMachine:
    return QuizTakingMachine(context)


def test_starts_in_loading(machine):
    assert machine.state is TakingState.LOADING
    assert machine.current_question is None


def test_load_enters_first_question(machine, context):
    quiz = make_quiz(questions=2, time_limit=10)
    machine.load(quiz)

    assert machine.state is TakingState.ANSWERING
    assert machine.question_index == 0
    assert machine.current_question == quiz.quiz_questions[0]
    assert machine.seconds_left == 10
    assert machine.progress == 0.5
    assert context.current_quiz is quiz


def test_load_rejects_quiz_without_questions(machine):
    with pytest.raises(ValueError):
        machine.load(make_quiz(questions=0))


def test_submit_without_selection_warns(machine):
    machine.load(make_quiz())
    with pytest.raises(NoSelectionError, match="Please select an answer"):
        machine.submit()
    assert machine.state is TakingState.ANSWERING


def test_selection_can_be_overwritten_and_is_exact(machine):
    machine.load(make_quiz())
    machine.select_option("3")
    machine.select_option("4")

    answer = machine.submit()

    assert answer == RecordedAnswer(question_index=0, selected_answer="4", is_correct=True)
    assert machine.state is TakingState.FEEDBACK


def test_correctness_uses_exact_string_equality(machine):
    quiz = make_quiz(questions=1)
    quiz.quiz_questions[0].options = ["Paris", "paris", "Rome", "Oslo"]
    quiz.quiz_questions[0].answer = "Paris"
    machine.load(quiz)

    machine.select_option("paris")

    assert machine.submit().is_correct is False


def test_selection_ignored_during_feedback(machine):
    machine.load(make_quiz())
    machine.select_option("4")
    machine.submit()

    assert machine.select_option("3") is False
    assert machine.selected_answer == "4"


def test_timeout_without_selection_records_no_answer(machine):
    machine.load(make_quiz(questions=2, time_limit=5))
    results = [machine.tick() for _ in range(5)]

    assert results[:4] == [None] * 4
    assert results[4] == RecordedAnswer(question_index=0, selected_answer="No answer", is_correct=False)
    assert machine.state is TakingState.FEEDBACK
    assert machine.timer_expired
    assert machine.select_option("4") is False


def test_timeout_with_correct_selection_is_still_incorrect(machine):
    machine.load(make_quiz(questions=1, time_limit=5))
    machine.select_option("4")
    for _ in range(5):
        answer = machine.tick()

    assert answer.selected_answer == "4"
    assert answer.is_correct is False


def test_countdown_restarts_for_next_question(machine):
    machine.load(make_quiz(questions=2, time_limit=5))
    machine.tick()
    machine.tick()
    machine.select_option("4")
    machine.submit()
    machine.tick()
    assert machine.seconds_left == 3  # frozen during feedback

    machine.advance()

    assert machine.question_index == 1
    assert machine.seconds_left == 5
    assert machine.selected_answer is None
    assert not machine.timer_expired


def test_untimed_quiz_never_times_out(machine):
    machine.load(make_quiz(questions=1))
    for _ in range(500):
        assert machine.tick() is None
    assert machine.seconds_left is None
    assert machine.state is TakingState.ANSWERING


def test_elapsed_time_runs_through_feedback(machine, context):
    machine.load(make_quiz(questions=1))
    machine.tick()
    machine.select_option("4")
    machine.submit()
    machine.tick()
    machine.tick()

    assert machine.elapsed_seconds == 3
    assert context.time_spent == 3


def test_advance_requires_feedback(machine):
    machine.load(make_quiz())
    with pytest.raises(RuntimeError):
        machine.advance()


def test_finishing_hands_answers_to_context_and_stops_timers(machine, context):
    machine.load(make_quiz(questions=2, time_limit=10))
    machine.select_option("4")
    machine.submit()
    assert machine.advance() is TakingState.ANSWERING
    assert machine.is_last_question
    machine.select_option("5")
    machine.submit()
    machine.tick()

    assert machine.advance() is TakingState.FINISHED
    assert machine.current_question is None
    assert [a.is_correct for a in context.answers] == [True, False]
    assert [a.question_index for a in context.answers] == [0, 1]
    assert context.time_spent == 1

    machine.tick()
    assert machine.elapsed_seconds == 1


def test_load_resets_previous_session(machine, context):
    machine.load(make_quiz(questions=1))
    machine.select_option("4")
    machine.submit()
    machine.advance()

    machine.load(make_quiz(questions=1))

    assert context.answers == []
    assert context.time_spent == 0
    assert machine.answers == []
    assert machine.state is TakingState.ANSWERING
