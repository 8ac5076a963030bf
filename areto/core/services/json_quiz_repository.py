"""Quiz repository persisted to a single JSON file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from areto.core.errors import StorageError
from areto.core.models import Quiz
from areto.core.quiz_documents import quiz_from_document, quiz_to_document
from areto.core.services.quiz_repository import InMemoryQuizRepository, is_valid_quiz_id

logger = logging.getLogger(__name__)


class JsonFileQuizRepository(InMemoryQuizRepository):
    """In-memory repository that mirrors its contents to ``path``.

    The file is read once on construction and rewritten after every mutation
    through a temporary file, so a crash mid-write leaves the previous
    snapshot intact.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = Path(path)
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Could not read quiz store {self._path}: {exc}") from exc
        if not isinstance(raw, list):
            raise StorageError(f"Quiz store {self._path} must contain a JSON list.")

        for document in raw:
            quiz = quiz_from_document(document)
            if not is_valid_quiz_id(quiz.id):
                logger.warning("Skipping stored quiz with malformed id %r", quiz.id)
                continue
            self._quizzes[quiz.id] = quiz
        logger.info("Loaded %d quizzes from %s", len(self._quizzes), self._path)

    def _after_write(self, previous: dict[str, Quiz]) -> None:
        documents = [quiz_to_document(quiz) for quiz in self._quizzes.values()]
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(documents, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(temp_path, self._path)
        except OSError as exc:
            # Keep memory in step with the file that is still on disk
            self._quizzes = previous
            raise StorageError(f"Could not write quiz store {self._path}: {exc}") from exc
