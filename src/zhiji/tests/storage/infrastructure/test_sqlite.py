"""Tests for SqliteEvaluationRepository."""

import sqlite3
from contextlib import closing
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from zhiji.evaluation.domain.input import EvaluationInput
from zhiji.evaluation.domain.metrics import EvaluationMetrics
from zhiji.evaluation.domain.result import EvaluationResult, MetricsSource
from zhiji.evaluation.domain.zone import Zone
from zhiji.storage.domain.record import EvaluationStatus
from zhiji.storage.infrastructure.errors import EvaluationNotFoundError, StorageError
from zhiji.storage.infrastructure.sqlite import SqliteEvaluationRepository

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _Clock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self) -> None:
        self._current = datetime(2025, 9, 1, 8, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self._current += timedelta(seconds=1)
        return self._current


def _make_repository(tmp_path: Path) -> SqliteEvaluationRepository:
    return SqliteEvaluationRepository(path=tmp_path / "zhiji.sqlite3", now=_Clock())


def _make_input(project_name: str = "Demo") -> EvaluationInput:
    return EvaluationInput(
        project_name=project_name,
        description="Summarises weekly sales reports for regional managers.",
        target_users="Sales managers",
        features=["summaries", "alerts"],
        constraints=["GDPR"],
        model_id="qwen3",
    )


def _make_result(
    total_score: int = 77, source: MetricsSource = MetricsSource.MODEL
) -> EvaluationResult:
    metrics = EvaluationMetrics(
        clarity_score=80,
        capability_score=75,
        objectivity_score=70,
        data_score=72,
        tolerance_score=85,
        matrix_x=55,
        matrix_y=70,
        zone=Zone.OPTIMAL,
        suggestions=["Pilot with one region."],
        risks=["Stale CRM data."],
        reasoning="Well scoped.",
    )
    return EvaluationResult(
        metrics=metrics, total_score=total_score, source=source
    )


# ---------------------------------------------------------------------------
# create / get
# ---------------------------------------------------------------------------


class TestCreate:
    def test_returns_prefixed_id(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)

        evaluation_id = repository.create(_make_input(), user_id="user_demo")

        assert evaluation_id.startswith("eval_")
        assert len(evaluation_id) == len("eval_") + 12

    def test_new_evaluation_is_processing_without_metrics(
        self, tmp_path: Path
    ) -> None:
        repository = _make_repository(tmp_path)
        evaluation_id = repository.create(_make_input(), user_id="user_demo")

        record = repository.get(evaluation_id)

        assert record is not None
        assert record.status is EvaluationStatus.PROCESSING
        assert record.metrics is None
        assert record.total_score is None
        assert record.completed_at is None

    def test_input_fields_round_trip(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)
        evaluation_id = repository.create(_make_input(), user_id="user_demo")

        record = repository.get(evaluation_id)

        assert record is not None
        assert record.user_id == "user_demo"
        assert record.project_name == "Demo"
        assert record.target_users == "Sales managers"
        assert record.features == ["summaries", "alerts"]
        assert record.constraints == ["GDPR"]
        assert record.model_id == "qwen3"

    def test_get_unknown_id_returns_none(self, tmp_path: Path) -> None:
        assert _make_repository(tmp_path).get("eval_missing") is None

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "dir" / "zhiji.sqlite3"
        SqliteEvaluationRepository(path=path)
        assert path.exists()


# ---------------------------------------------------------------------------
# complete
# ---------------------------------------------------------------------------


class TestComplete:
    def test_marks_completed_with_metrics(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)
        evaluation_id = repository.create(_make_input(), user_id="user_demo")

        repository.complete(evaluation_id, _make_result(total_score=77))
        record = repository.get(evaluation_id)

        assert record is not None
        assert record.status is EvaluationStatus.COMPLETED
        assert record.total_score == 77
        assert record.completed_at is not None
        assert record.completed_at > record.created_at
        assert record.metrics == _make_result().metrics
        assert record.source is MetricsSource.MODEL

    def test_fallback_source_persisted(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)
        evaluation_id = repository.create(_make_input(), user_id="user_demo")

        repository.complete(
            evaluation_id, _make_result(source=MetricsSource.FALLBACK)
        )
        record = repository.get(evaluation_id)

        assert record is not None
        assert record.source is MetricsSource.FALLBACK

    def test_unknown_id_raises_not_found(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)

        with pytest.raises(EvaluationNotFoundError):
            repository.complete("eval_missing", _make_result())

    def test_second_completion_rejected(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)
        evaluation_id = repository.create(_make_input(), user_id="user_demo")
        repository.complete(evaluation_id, _make_result(total_score=77))

        with pytest.raises(StorageError, match="complete evaluation"):
            repository.complete(evaluation_id, _make_result(total_score=90))

        record = repository.get(evaluation_id)
        assert record is not None
        assert record.total_score == 77

    def test_one_metrics_row_per_evaluation(self, tmp_path: Path) -> None:
        path = tmp_path / "zhiji.sqlite3"
        repository = SqliteEvaluationRepository(path=path)
        evaluation_id = repository.create(_make_input(), user_id="user_demo")
        repository.complete(evaluation_id, _make_result())

        with closing(sqlite3.connect(path)) as conn:
            (count,) = conn.execute(
                "SELECT COUNT(*) FROM evaluation_metrics WHERE evaluation_id = ?",
                (evaluation_id,),
            ).fetchone()

        assert count == 1


# ---------------------------------------------------------------------------
# fail
# ---------------------------------------------------------------------------


class TestFail:
    def test_marks_failed_without_metrics(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)
        evaluation_id = repository.create(_make_input(), user_id="user_demo")

        repository.fail(evaluation_id)
        record = repository.get(evaluation_id)

        assert record is not None
        assert record.status is EvaluationStatus.FAILED
        assert record.metrics is None
        assert record.source is None
        assert record.completed_at is None

    def test_unknown_id_raises_not_found(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)

        with pytest.raises(EvaluationNotFoundError):
            repository.fail("eval_missing")


# ---------------------------------------------------------------------------
# list_recent / ping
# ---------------------------------------------------------------------------


class TestListRecent:
    def test_newest_first(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)
        for name in ("first", "second", "third"):
            repository.create(_make_input(project_name=name), user_id="user_demo")

        records = repository.list_recent()

        assert [record.project_name for record in records] == [
            "third",
            "second",
            "first",
        ]

    def test_limit_applied(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)
        for index in range(12):
            repository.create(_make_input(project_name=f"p{index}"), user_id="u")

        assert len(repository.list_recent(limit=10)) == 10

    def test_empty_store_returns_empty_list(self, tmp_path: Path) -> None:
        assert _make_repository(tmp_path).list_recent() == []

    def test_includes_metrics_of_completed(self, tmp_path: Path) -> None:
        repository = _make_repository(tmp_path)
        evaluation_id = repository.create(_make_input(), user_id="user_demo")
        repository.complete(evaluation_id, _make_result())

        (record,) = repository.list_recent()

        assert record.metrics is not None
        assert record.metrics.zone is Zone.OPTIMAL


class TestPing:
    def test_healthy_store(self, tmp_path: Path) -> None:
        assert _make_repository(tmp_path).ping() is True

    def test_dropped_table_reports_unhealthy(self, tmp_path: Path) -> None:
        path = tmp_path / "zhiji.sqlite3"
        repository = SqliteEvaluationRepository(path=path)
        with closing(sqlite3.connect(path)) as conn:
            conn.execute("DROP TABLE evaluation_metrics")
            conn.execute("DROP TABLE evaluations")
            conn.commit()

        assert repository.ping() is False
