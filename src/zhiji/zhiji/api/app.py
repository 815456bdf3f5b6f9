"""FastAPI application exposing feasibility evaluation endpoints."""

import asyncio
import random
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from zhiji.api.schemas import EvaluationRequest
from zhiji.config.domain.config import AppConfig
from zhiji.core.errors import ZhijiError
from zhiji.evaluation.application.pipeline import (
    TIMEOUT_GRACE_SECONDS,
    EvaluationPipeline,
)
from zhiji.evaluation.domain.fallback import FallbackEstimator
from zhiji.evaluation.domain.observer import EvaluationObserver
from zhiji.model.domain.factory import ModelCallerFactory
from zhiji.storage.domain.repository import EvaluationRepository

SERVICE_NAME = "zhiji-api"
# No accounts yet; every submission is attributed to the demo user.
DEMO_USER_ID = "user_demo"
RECENT_LIMIT = 10

log = structlog.get_logger()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _mark_failed(repository: EvaluationRepository, evaluation_id: str) -> None:
    try:
        repository.fail(evaluation_id)
    except ZhijiError as exc:
        log.error(
            "api.evaluation_mark_failed_error",
            evaluation_id=evaluation_id,
            reason=str(exc),
        )


def create_app(
    config: AppConfig,
    repository: EvaluationRepository,
    caller_factory: ModelCallerFactory,
    observer: EvaluationObserver,
    rng_factory: Callable[[], random.Random] = random.Random,
) -> FastAPI:
    """Build the API with its collaborators injected.

    Each submission gets its own model caller and its own random source for
    the fallback estimator; nothing mutable is shared between requests apart
    from the repository. Repository calls block, so they run in worker threads.
    """
    app = FastAPI(
        title="Zhiji API",
        description="Scores the feasibility of proposed AI agent projects.",
        version=config.version,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.get("/", tags=["Service"])
    async def home() -> dict[str, str]:
        return {"message": "Zhiji API service", "version": config.version}

    @app.get("/health", tags=["Service"])
    async def health() -> dict[str, str]:
        connected = await asyncio.to_thread(repository.ping)
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "timestamp": datetime.now(UTC).isoformat(),
            "database": "connected" if connected else "error",
        }

    api = APIRouter(prefix="/api", tags=["Evaluations"])

    @api.post("/evaluations", status_code=status.HTTP_201_CREATED, response_model=None)
    async def create_evaluation(
        body: EvaluationRequest,
    ) -> dict[str, Any] | JSONResponse:
        evaluation_input = body.to_input(default_model_id=config.models.default)
        log.info(
            "api.evaluation_received",
            project_name=evaluation_input.project_name,
            model_id=evaluation_input.model_id,
        )

        try:
            evaluation_id = await asyncio.to_thread(
                repository.create, evaluation_input, user_id=DEMO_USER_ID
            )
        except ZhijiError as exc:
            log.error("api.evaluation_failed", reason=str(exc))
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create evaluation"
            )

        pipeline = EvaluationPipeline(
            caller=caller_factory.create(evaluation_input.model_id),
            estimator=FallbackEstimator(rng=rng_factory()),
            observer=observer,
            weights=config.scoring.weights,
            timeout_seconds=config.llm.timeout_seconds + TIMEOUT_GRACE_SECONDS,
        )
        result = await pipeline.run(evaluation_input)

        try:
            await asyncio.to_thread(repository.complete, evaluation_id, result)
        except ZhijiError as exc:
            log.error(
                "api.evaluation_failed", evaluation_id=evaluation_id, reason=str(exc)
            )
            await asyncio.to_thread(_mark_failed, repository, evaluation_id)
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create evaluation"
            )

        return {
            "id": evaluation_id,
            "status": "completed",
            "message": "Evaluation completed",
            **result.to_wire(),
            **evaluation_input.model_dump(mode="json", by_alias=True),
        }

    @api.get("/evaluations", response_model=None)
    async def list_evaluations() -> dict[str, Any] | JSONResponse:
        try:
            records = await asyncio.to_thread(
                repository.list_recent, limit=RECENT_LIMIT
            )
        except ZhijiError as exc:
            log.error("api.list_failed", reason=str(exc))
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to list evaluations"
            )
        return {
            "data": [
                record.model_dump(mode="json", by_alias=True) for record in records
            ],
            "total": len(records),
        }

    @api.get("/evaluations/{evaluation_id}", response_model=None)
    async def read_evaluation(evaluation_id: str) -> dict[str, Any] | JSONResponse:
        try:
            record = await asyncio.to_thread(repository.get, evaluation_id)
        except ZhijiError as exc:
            log.error("api.read_failed", evaluation_id=evaluation_id, reason=str(exc))
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to read evaluation"
            )
        if record is None:
            return _error(status.HTTP_404_NOT_FOUND, "Evaluation not found")
        return record.model_dump(mode="json", by_alias=True)

    app.include_router(api)
    return app
