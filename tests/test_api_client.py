from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from areto.client.api_client import ApiError, AretoApiClient
from areto.core.models import CompletionStats, QuizDraft, QuizPatch
from conftest import make_question

QUIZ_DOCUMENT = {
    "id": "a" * 32,
    "title": "JS Basics",
    "icon": "📝",
    "timeLimit": 30,
    "quizQuestions": [{"question": "2+2?", "options": ["3", "4", "5", "6"], "answer": "4"}],
    "totalPlays": 2,
    "averageSuccessRate": 75,
    "fastestCompletion": None,
    "createdBy": "alice",
    "createdAt": "2024-05-01T10:00:00Z",
    "updatedAt": "2024-05-02T10:00:00+00:00",
}


class _DummyResponse:
    def __init__(self, payload: Any, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code
        self.ok = status_code < 400

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def _client(response: _DummyResponse) -> tuple[AretoApiClient, MagicMock]:
    session = MagicMock()
    session.request.return_value = response
    return AretoApiClient("http://quiz.test/api/", session=session, timeout=3), session


def test_get_all_quizzes_parses_summaries():
    summary = {key: QUIZ_DOCUMENT[key] for key in ("id", "title", "icon", "quizQuestions", "totalPlays", "averageSuccessRate", "createdAt", "createdBy")}
    client, session = _client(_DummyResponse([summary]))

    [quiz] = client.get_all_quizzes()

    session.request.assert_called_once_with("GET", "http://quiz.test/api/quizzes", json=None, timeout=3)
    assert quiz.title == "JS Basics"
    assert quiz.average_success_rate == 75
    assert quiz.created_at.tzinfo is not None
    assert quiz.quiz_questions[0].answer == "4"


def test_get_quiz_parses_document():
    client, _ = _client(_DummyResponse(QUIZ_DOCUMENT))

    quiz = client.get_quiz("a" * 32)

    assert quiz.id == "a" * 32
    assert quiz.time_limit == 30
    assert quiz.total_plays == 2
    assert quiz.created_by == "alice"


def test_create_quiz_sends_camel_case_and_omits_missing_fields():
    client, session = _client(_DummyResponse(QUIZ_DOCUMENT, status_code=201))

    client.create_quiz(QuizDraft(title="JS Basics", quiz_questions=[make_question()], created_by="alice"))

    method, url = session.request.call_args.args
    payload = session.request.call_args.kwargs["json"]
    assert (method, url) == ("POST", "http://quiz.test/api/quizzes")
    assert payload == {
        "title": "JS Basics",
        "createdBy": "alice",
        "quizQuestions": [{"question": "2+2?", "options": ["3", "4", "5", "6"], "answer": "4"}],
    }


def test_update_quiz_includes_user_id():
    client, session = _client(_DummyResponse(QUIZ_DOCUMENT))

    client.update_quiz("a" * 32, QuizPatch(title="Renamed", time_limit=60), "alice")

    assert session.request.call_args.args == ("PUT", f"http://quiz.test/api/quizzes/{'a' * 32}")
    assert session.request.call_args.kwargs["json"] == {"title": "Renamed", "timeLimit": 60, "userId": "alice"}


def test_delete_quiz_returns_message():
    client, session = _client(_DummyResponse({"message": "Quiz deleted successfully"}))

    assert client.delete_quiz("a" * 32, "alice") == "Quiz deleted successfully"
    assert session.request.call_args.kwargs["json"] == {"userId": "alice"}


def test_complete_quiz_returns_stats():
    response = {"message": "Quiz completed successfully", "totalPlays": 3, "averageSuccessRate": 50}
    client, session = _client(_DummyResponse(response))

    stats = client.complete_quiz("a" * 32, 1, 2, time_spent=40)

    assert stats == CompletionStats(total_plays=3, average_success_rate=50)
    assert session.request.call_args.kwargs["json"] == {"score": 1, "totalQuestions": 2, "timeSpent": 40}


def test_error_detail_is_surfaced():
    client, _ = _client(_DummyResponse({"detail": "You do not have permission to delete this quiz"}, 403))

    with pytest.raises(ApiError) as excinfo:
        client.delete_quiz("a" * 32, "mallory")

    assert excinfo.value.status_code == 403
    assert excinfo.value.is_forbidden
    assert excinfo.value.message == "You do not have permission to delete this quiz"


def test_error_without_json_body():
    client, _ = _client(_DummyResponse(ValueError("not json"), 502))

    with pytest.raises(ApiError, match="status 502"):
        client.get_all_quizzes()


def test_network_errors_propagate():
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("refused")
    client = AretoApiClient("http://quiz.test/api", session=session)

    with pytest.raises(requests.RequestException):
        client.get_all_quizzes()
