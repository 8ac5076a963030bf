"""Storage contract for quiz documents and its in-memory implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
import copy
from datetime import datetime, timezone
import re
from threading import Lock
from uuid import uuid4

from areto.core.errors import InvalidIdError, StorageError
from areto.core.models import Quiz

_QUIZ_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def is_valid_quiz_id(quiz_id: object) -> bool:
    return isinstance(quiz_id, str) and bool(_QUIZ_ID_PATTERN.fullmatch(quiz_id))


def ensure_valid_quiz_id(quiz_id: object) -> str:
    """Return ``quiz_id`` unchanged or raise InvalidIdError."""
    if not is_valid_quiz_id(quiz_id):
        raise InvalidIdError(f"Malformed quiz id: {quiz_id!r}")
    return quiz_id


def new_quiz_id() -> str:
    return uuid4().hex


class QuizRepository(ABC):
    """Operations the quiz service needs from a document store.

    Lookups by a malformed id raise InvalidIdError; a well-formed id that is
    not stored yields ``None`` / ``False``.
    """

    @abstractmethod
    def insert(self, quiz: Quiz) -> Quiz:
        """Store a new quiz and return it with its id and timestamps set."""

    @abstractmethod
    def find_all(self) -> list[Quiz]:
        """Return every stored quiz."""

    @abstractmethod
    def find_by_id(self, quiz_id: str) -> Quiz | None:
        """Return the quiz with ``quiz_id`` or ``None``."""

    @abstractmethod
    def save(self, quiz: Quiz) -> Quiz:
        """Overwrite an existing quiz in place."""

    @abstractmethod
    def delete_by_id(self, quiz_id: str) -> bool:
        """Delete a quiz; return whether anything was removed."""


class InMemoryQuizRepository(QuizRepository):
    """Keeps quizzes in a dict. Every read and write works on copies."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._quizzes: dict[str, Quiz] = {}

    def insert(self, quiz: Quiz) -> Quiz:
        stored = copy.deepcopy(quiz)
        now = datetime.now(timezone.utc)
        stored.id = new_quiz_id()
        stored.created_at = now
        stored.updated_at = now
        with self._lock:
            previous = dict(self._quizzes)
            self._quizzes[stored.id] = stored
            self._after_write(previous)
        return copy.deepcopy(stored)

    def find_all(self) -> list[Quiz]:
        with self._lock:
            return [copy.deepcopy(quiz) for quiz in self._quizzes.values()]

    def find_by_id(self, quiz_id: str) -> Quiz | None:
        ensure_valid_quiz_id(quiz_id)
        with self._lock:
            quiz = self._quizzes.get(quiz_id)
            return copy.deepcopy(quiz) if quiz is not None else None

    def save(self, quiz: Quiz) -> Quiz:
        ensure_valid_quiz_id(quiz.id)
        stored = copy.deepcopy(quiz)
        with self._lock:
            existing = self._quizzes.get(stored.id)
            if existing is None:
                raise StorageError(f"Quiz {stored.id} does not exist")
            stored.created_at = existing.created_at
            stored.updated_at = datetime.now(timezone.utc)
            previous = dict(self._quizzes)
            self._quizzes[stored.id] = stored
            self._after_write(previous)
        return copy.deepcopy(stored)

    def delete_by_id(self, quiz_id: str) -> bool:
        ensure_valid_quiz_id(quiz_id)
        with self._lock:
            previous = dict(self._quizzes)
            removed = self._quizzes.pop(quiz_id, None) is not None
            if removed:
                self._after_write(previous)
            return removed

    def clear(self) -> None:
        with self._lock:
            previous = dict(self._quizzes)
            self._quizzes.clear()
            self._after_write(previous)

    def _after_write(self, previous: dict[str, Quiz]) -> None:
        """Hook run under the lock after every mutation; ``previous`` is the state before it."""
