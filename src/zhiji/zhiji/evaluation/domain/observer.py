"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during one pipeline run.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def evaluation_started(self, project_name: str, model_id: str) -> None: ...

    def evaluation_model_unavailable(self, project_name: str, reason: str) -> None: ...

    def evaluation_response_rejected(self, project_name: str, reason: str) -> None: ...

    def evaluation_completed(
        self,
        project_name: str,
        total_score: int,
        source: str,
        duration_ms: int,
    ) -> None: ...
