"""HTTP client for the Areto quiz API."""

from __future__ import annotations

import logging
from typing import Any

import requests

from areto.constants.network_constants import DEFAULT_API_BASE_URL, REQUEST_TIMEOUT_SECONDS
from areto.core.models import CompletionStats, Quiz, QuizDraft, QuizPatch, QuizSummary
from areto.core.quiz_documents import question_to_document, quiz_from_document, summary_from_document

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A non-2xx response; ``message`` is the server's ``detail`` when it sent one."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == 403

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


class AretoApiClient:
    """Thin wrapper over ``requests`` returning domain objects."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def get_all_quizzes(self) -> list[QuizSummary]:
        data = self._request("GET", "/quizzes")
        return [summary_from_document(item) for item in data]

    def get_quiz(self, quiz_id: str) -> Quiz:
        return quiz_from_document(self._request("GET", f"/quizzes/{quiz_id}"))

    def create_quiz(self, draft: QuizDraft) -> Quiz:
        payload = _drop_none(
            {
                "title": draft.title,
                "icon": draft.icon,
                "timeLimit": draft.time_limit,
                "createdBy": draft.created_by,
                "quizQuestions": (
                    [question_to_document(q) for q in draft.quiz_questions]
                    if draft.quiz_questions is not None
                    else None
                ),
            }
        )
        return quiz_from_document(self._request("POST", "/quizzes", json=payload))

    def update_quiz(self, quiz_id: str, patch: QuizPatch, user_id: str) -> Quiz:
        payload = _drop_none(
            {
                "title": patch.title,
                "icon": patch.icon,
                "timeLimit": patch.time_limit,
                "quizQuestions": (
                    [question_to_document(q) for q in patch.quiz_questions]
                    if patch.quiz_questions is not None
                    else None
                ),
            }
        )
        payload["userId"] = user_id
        return quiz_from_document(self._request("PUT", f"/quizzes/{quiz_id}", json=payload))

    def delete_quiz(self, quiz_id: str, user_id: str) -> str:
        data = self._request("DELETE", f"/quizzes/{quiz_id}", json={"userId": user_id})
        return data.get("message", "")

    def complete_quiz(
        self,
        quiz_id: str,
        score: int,
        total_questions: int,
        time_spent: int | None = None,
        user_id: str | None = None,
    ) -> CompletionStats:
        payload = _drop_none(
            {
                "score": score,
                "totalQuestions": total_questions,
                "timeSpent": time_spent,
                "userId": user_id,
            }
        )
        data = self._request("POST", f"/quizzes/{quiz_id}/complete", json=payload)
        return CompletionStats(
            total_plays=data["totalPlays"],
            average_success_rate=data["averageSuccessRate"],
        )

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)
        response = self._session.request(method, url, json=json, timeout=self._timeout)
        if not response.ok:
            raise ApiError(response.status_code, self._error_message(response))
        return response.json()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"Request failed with status {response.status_code}"
        if isinstance(body, dict):
            detail = body.get("detail") or body.get("message")
            if isinstance(detail, str):
                return detail
        return f"Request failed with status {response.status_code}"
