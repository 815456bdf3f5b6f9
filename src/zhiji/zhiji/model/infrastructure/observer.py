"""Structlog implementation of the ModelObserver port."""

import structlog


class StructlogModelObserver:
    """Delegates model caller events to structlog.

    Satisfies the ModelObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def model_call_started(self, model_id: str, model: str) -> None:
        self._log.info("model.call_started", model_id=model_id, model=model)

    def model_call_completed(self, model_id: str, duration_ms: int) -> None:
        self._log.info(
            "model.call_completed", model_id=model_id, duration_ms=duration_ms
        )

    def model_call_failed(self, model_id: str, reason: str) -> None:
        self._log.error("model.call_failed", model_id=model_id, reason=reason)

    def model_call_skipped(self, model_id: str, reason: str) -> None:
        self._log.warning("model.call_skipped", model_id=model_id, reason=reason)

    def model_tier_unknown(self, model_id: str, fallback_model_id: str) -> None:
        self._log.warning(
            "model.tier_unknown",
            model_id=model_id,
            fallback_model_id=fallback_model_id,
        )
