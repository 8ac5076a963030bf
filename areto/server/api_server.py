"""FastAPI server exposing the quiz endpoints."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from areto import __version__
from areto.config import Settings, get_settings
from areto.constants.network_constants import API_PREFIX
from areto.core.errors import (
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    StorageError,
    ValidationError,
)
from areto.core.services.json_quiz_repository import JsonFileQuizRepository
from areto.core.services.quiz_repository import InMemoryQuizRepository, QuizRepository
from areto.core.services.quiz_service import QuizService
from areto.core.services.rate_limiter import (
    InMemoryRateLimitBackend,
    RateLimiter,
    RedisRateLimitBackend,
)
from areto.server.schemas import (
    CompletePayload,
    CompletionOut,
    MessageOut,
    OwnerPayload,
    QuizCreatePayload,
    QuizOut,
    QuizSummaryOut,
    QuizUpdatePayload,
)
from areto.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _get_quiz_service_dependency(quiz_service: QuizService):
    def dependency() -> QuizService:
        return quiz_service

    return dependency


def _server_error(action: str, exc: Exception) -> HTTPException:
    logger.error("Error %s: %s", action, exc, exc_info=exc)
    return HTTPException(status_code=500, detail=f"Server Error: Could not {action}.")


def create_api_app(quiz_service: QuizService, rate_limiter: RateLimiter | None = None) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz service."""
    app = FastAPI(title="Areto Quiz API", version=__version__)
    quiz_service_dep = _get_quiz_service_dependency(quiz_service)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Request received: %s %s", request.method, request.url.path)
        return await call_next(request)

    if rate_limiter is not None:

        @app.middleware("http")
        async def limit_request_rate(request: Request, call_next):
            source = request.client.host if request.client else "unknown"
            try:
                # Backend calls may block on network I/O
                await run_in_threadpool(rate_limiter.check, source)
            except RateLimitedError as exc:
                return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})
            return await call_next(request)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "Areto Quiz API", "status": "running", "version": __version__}

    @app.get(f"{API_PREFIX}/quizzes", response_model=list[QuizSummaryOut])
    def list_quizzes(service: QuizService = Depends(quiz_service_dep)) -> list[QuizSummaryOut]:
        try:
            summaries = service.list_quizzes()
        except StorageError as exc:
            raise _server_error("fetch quizzes", exc) from exc
        return [QuizSummaryOut.from_summary(summary) for summary in summaries]

    @app.get(f"{API_PREFIX}/quizzes/{{quiz_id}}", response_model=QuizOut)
    def get_quiz(quiz_id: str, service: QuizService = Depends(quiz_service_dep)) -> QuizOut:
        try:
            quiz = service.get_quiz(quiz_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except StorageError as exc:
            raise _server_error("fetch quiz", exc) from exc
        return QuizOut.from_quiz(quiz)

    @app.post(f"{API_PREFIX}/quizzes", response_model=QuizOut, status_code=201)
    def create_quiz(
        payload: QuizCreatePayload,
        service: QuizService = Depends(quiz_service_dep),
    ) -> QuizOut:
        try:
            quiz = service.create_quiz(payload.to_draft())
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except StorageError as exc:
            raise _server_error("create quiz", exc) from exc
        return QuizOut.from_quiz(quiz)

    @app.put(f"{API_PREFIX}/quizzes/{{quiz_id}}", response_model=QuizOut)
    def update_quiz(
        quiz_id: str,
        payload: QuizUpdatePayload,
        service: QuizService = Depends(quiz_service_dep),
    ) -> QuizOut:
        try:
            quiz = service.update_quiz(quiz_id, payload.to_patch(), payload.user_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ForbiddenError as exc:
            raise HTTPException(status_code=403, detail=str(exc)) from exc
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except StorageError as exc:
            raise _server_error("update quiz", exc) from exc
        return QuizOut.from_quiz(quiz)

    @app.delete(f"{API_PREFIX}/quizzes/{{quiz_id}}", response_model=MessageOut)
    def delete_quiz(
        quiz_id: str,
        payload: OwnerPayload | None = Body(default=None),
        user_id: str | None = Query(default=None, alias="userId"),
        service: QuizService = Depends(quiz_service_dep),
    ) -> MessageOut:
        # The owner id normally travels in the body; a userId query parameter is accepted too
        caller_id = payload.user_id if payload is not None and payload.user_id else user_id
        try:
            service.delete_quiz(quiz_id, caller_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ForbiddenError as exc:
            raise HTTPException(status_code=403, detail=str(exc)) from exc
        except StorageError as exc:
            raise _server_error("delete quiz", exc) from exc
        return MessageOut(message="Quiz deleted successfully")

    @app.post(f"{API_PREFIX}/quizzes/{{quiz_id}}/complete", response_model=CompletionOut)
    def complete_quiz(
        quiz_id: str,
        payload: CompletePayload,
        service: QuizService = Depends(quiz_service_dep),
    ) -> CompletionOut:
        try:
            stats = service.complete_quiz(
                quiz_id,
                payload.score,
                payload.total_questions,
                time_spent=payload.time_spent,
            )
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except StorageError as exc:
            raise _server_error("complete quiz", exc) from exc
        return CompletionOut.from_stats(stats)

    return app


def build_quiz_service(settings: Settings) -> QuizService:
    """Create the quiz service backed by the configured store."""
    repository: QuizRepository
    if settings.data_file is not None:
        repository = JsonFileQuizRepository(settings.data_file)
    else:
        repository = InMemoryQuizRepository()
    return QuizService(repository)


def build_rate_limiter(settings: Settings) -> RateLimiter:
    if settings.redis_url:
        backend = RedisRateLimitBackend.from_url(settings.redis_url)
    else:
        backend = InMemoryRateLimitBackend()
    return RateLimiter(
        backend,
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
        fail_open=settings.rate_limit_fail_open,
    )


def start_api_server(
    quiz_service: QuizService,
    settings: Settings | None = None,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    settings = settings or get_settings()
    app = create_api_app(quiz_service, build_rate_limiter(settings))
    config = uvicorn.Config(app=app, host=settings.host, port=settings.port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="AretoApiServer", daemon=True)
    thread.start()
    return thread


def main() -> None:
    """Run the API server in the foreground."""
    settings = get_settings()
    logger = configure_logging(settings.log_level)
    app = create_api_app(build_quiz_service(settings), build_rate_limiter(settings))
    logger.info("Areto API listening on http://%s:%d%s", settings.host, settings.port, API_PREFIX)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
