"""Tests for StructlogEvaluationObserver."""

from structlog.testing import capture_logs

from zhiji.evaluation.infrastructure.observer import StructlogEvaluationObserver


class TestStructlogEvaluationObserver:
    """Each domain event becomes one structured log entry."""

    def test_started_logged_at_info(self) -> None:
        with capture_logs() as logs:
            StructlogEvaluationObserver().evaluation_started(
                project_name="Demo", model_id="qwen3"
            )

        assert logs == [
            {
                "event": "evaluation.started",
                "log_level": "info",
                "project_name": "Demo",
                "model_id": "qwen3",
            }
        ]

    def test_model_unavailable_logged_as_warning(self) -> None:
        with capture_logs() as logs:
            StructlogEvaluationObserver().evaluation_model_unavailable(
                project_name="Demo", reason="model caller returned no answer"
            )

        assert logs[0]["event"] == "evaluation.model_unavailable"
        assert logs[0]["log_level"] == "warning"
        assert logs[0]["reason"] == "model caller returned no answer"

    def test_response_rejected_logged_as_warning(self) -> None:
        with capture_logs() as logs:
            StructlogEvaluationObserver().evaluation_response_rejected(
                project_name="Demo", reason="missing or non-numeric fields: dataScore"
            )

        assert logs[0]["event"] == "evaluation.response_rejected"
        assert logs[0]["log_level"] == "warning"

    def test_completed_carries_score_and_source(self) -> None:
        with capture_logs() as logs:
            StructlogEvaluationObserver().evaluation_completed(
                project_name="Demo", total_score=81, source="model", duration_ms=1200
            )

        entry = logs[0]
        assert entry["event"] == "evaluation.completed"
        assert entry["total_score"] == 81
        assert entry["source"] == "model"
        assert entry["duration_ms"] == 1200
