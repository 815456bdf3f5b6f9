"""ModelObserver port — domain events emitted while calling the upstream LLM."""

from typing import Protocol


class ModelObserver(Protocol):
    """Observer port for model caller events.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def model_call_started(self, model_id: str, model: str) -> None: ...

    def model_call_completed(self, model_id: str, duration_ms: int) -> None: ...

    def model_call_failed(self, model_id: str, reason: str) -> None: ...

    def model_call_skipped(self, model_id: str, reason: str) -> None: ...

    def model_tier_unknown(self, model_id: str, fallback_model_id: str) -> None: ...
