"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def evaluation_started(self, project_name: str, model_id: str) -> None:
        self._log.info(
            "evaluation.started",
            project_name=project_name,
            model_id=model_id,
        )

    def evaluation_model_unavailable(self, project_name: str, reason: str) -> None:
        self._log.warning(
            "evaluation.model_unavailable",
            project_name=project_name,
            reason=reason,
            message="Falling back to heuristic estimate",
        )

    def evaluation_response_rejected(self, project_name: str, reason: str) -> None:
        self._log.warning(
            "evaluation.response_rejected",
            project_name=project_name,
            reason=reason,
            message="Falling back to heuristic estimate",
        )

    def evaluation_completed(
        self,
        project_name: str,
        total_score: int,
        source: str,
        duration_ms: int,
    ) -> None:
        self._log.info(
            "evaluation.completed",
            project_name=project_name,
            total_score=total_score,
            source=source,
            duration_ms=duration_ms,
        )
