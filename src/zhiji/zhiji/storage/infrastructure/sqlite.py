"""SqliteEvaluationRepository — EvaluationRepository backed by a local SQLite file."""

import json
import sqlite3
import uuid
from collections.abc import Callable, Iterator
from contextlib import closing, contextmanager
from datetime import UTC, datetime
from pathlib import Path

from zhiji.evaluation.domain.input import EvaluationInput
from zhiji.evaluation.domain.metrics import EvaluationMetrics
from zhiji.evaluation.domain.result import EvaluationResult
from zhiji.storage.domain.record import EvaluationStatus, StoredEvaluation
from zhiji.storage.infrastructure.errors import EvaluationNotFoundError, StorageError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS evaluations (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    project_name TEXT NOT NULL,
    description TEXT NOT NULL,
    target_users TEXT,
    features TEXT NOT NULL,
    constraints TEXT NOT NULL,
    model_id TEXT NOT NULL,
    status TEXT NOT NULL,
    total_score INTEGER,
    created_at TEXT NOT NULL,
    completed_at TEXT
);
CREATE TABLE IF NOT EXISTS evaluation_metrics (
    id TEXT PRIMARY KEY,
    evaluation_id TEXT NOT NULL UNIQUE REFERENCES evaluations(id),
    clarity_score INTEGER NOT NULL,
    capability_score INTEGER NOT NULL,
    objectivity_score INTEGER NOT NULL,
    data_score INTEGER NOT NULL,
    tolerance_score INTEGER NOT NULL,
    matrix_x INTEGER NOT NULL,
    matrix_y INTEGER NOT NULL,
    zone TEXT NOT NULL,
    suggestions TEXT NOT NULL,
    risks TEXT NOT NULL,
    reasoning TEXT NOT NULL,
    source TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_evaluations_created_at ON evaluations(created_at);
"""

_SELECT_JOINED = """
SELECT e.*,
       m.clarity_score, m.capability_score, m.objectivity_score, m.data_score,
       m.tolerance_score, m.matrix_x, m.matrix_y, m.zone, m.suggestions,
       m.risks, m.reasoning, m.source
FROM evaluations e
LEFT JOIN evaluation_metrics m ON m.evaluation_id = e.id
"""


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqliteEvaluationRepository:
    """Stores evaluations in two related tables: evaluations and evaluation_metrics.

    A connection is opened per operation, so one instance can be shared by
    concurrent requests. Tables are created on construction.
    """

    def __init__(self, path: Path, now: Callable[[], datetime] = _utcnow) -> None:
        self._path = path
        self._now = now
        self._initialise()

    @contextmanager
    def _connect(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Yield a connection inside a transaction; sqlite errors become StorageError."""
        try:
            with closing(sqlite3.connect(self._path)) as conn:
                conn.row_factory = sqlite3.Row
                conn.execute("PRAGMA foreign_keys=ON")
                with conn:
                    yield conn
        except sqlite3.Error as exc:
            raise StorageError(operation=operation, reason=str(exc)) from exc

    def _initialise(self) -> None:
        if self._path.parent != Path("."):
            self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect("initialise evaluation store") as conn:
            conn.executescript(_SCHEMA)

    def create(self, evaluation_input: EvaluationInput, user_id: str) -> str:
        evaluation_id = _new_id("eval")
        with self._connect("create evaluation") as conn:
            conn.execute(
                "INSERT INTO evaluations (id, user_id, project_name, description,"
                " target_users, features, constraints, model_id, status, created_at)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    evaluation_id,
                    user_id,
                    evaluation_input.project_name,
                    evaluation_input.description,
                    evaluation_input.target_users,
                    json.dumps(evaluation_input.features, ensure_ascii=False),
                    json.dumps(evaluation_input.constraints, ensure_ascii=False),
                    evaluation_input.model_id,
                    EvaluationStatus.PROCESSING.value,
                    self._now().isoformat(),
                ),
            )
        return evaluation_id

    def complete(self, evaluation_id: str, result: EvaluationResult) -> None:
        """Write the metrics row and mark the evaluation completed atomically.

        Raises:
            EvaluationNotFoundError: if no evaluation with this id exists.
            StorageError: on any database failure, including a second
                completion of the same evaluation.
        """
        metrics = result.metrics
        with self._connect("complete evaluation") as conn:
            updated = conn.execute(
                "UPDATE evaluations SET status = ?, total_score = ?, completed_at = ?"
                " WHERE id = ?",
                (
                    EvaluationStatus.COMPLETED.value,
                    result.total_score,
                    self._now().isoformat(),
                    evaluation_id,
                ),
            )
            if updated.rowcount == 0:
                raise EvaluationNotFoundError(evaluation_id)
            conn.execute(
                "INSERT INTO evaluation_metrics (id, evaluation_id, clarity_score,"
                " capability_score, objectivity_score, data_score, tolerance_score,"
                " matrix_x, matrix_y, zone, suggestions, risks, reasoning, source)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    _new_id("metric"),
                    evaluation_id,
                    metrics.clarity_score,
                    metrics.capability_score,
                    metrics.objectivity_score,
                    metrics.data_score,
                    metrics.tolerance_score,
                    metrics.matrix_x,
                    metrics.matrix_y,
                    metrics.zone.value,
                    json.dumps(metrics.suggestions, ensure_ascii=False),
                    json.dumps(metrics.risks, ensure_ascii=False),
                    metrics.reasoning,
                    result.source.value,
                ),
            )

    def fail(self, evaluation_id: str) -> None:
        """Mark a submission whose result could not be stored as failed."""
        with self._connect("mark evaluation failed") as conn:
            updated = conn.execute(
                "UPDATE evaluations SET status = ? WHERE id = ?",
                (EvaluationStatus.FAILED.value, evaluation_id),
            )
            if updated.rowcount == 0:
                raise EvaluationNotFoundError(evaluation_id)

    def get(self, evaluation_id: str) -> StoredEvaluation | None:
        with self._connect("read evaluation") as conn:
            row = conn.execute(
                _SELECT_JOINED + " WHERE e.id = ?", (evaluation_id,)
            ).fetchone()
        return _to_record(row) if row is not None else None

    def list_recent(self, limit: int = 10) -> list[StoredEvaluation]:
        with self._connect("list evaluations") as conn:
            rows = conn.execute(
                _SELECT_JOINED + " ORDER BY e.created_at DESC, e.rowid DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [_to_record(row) for row in rows]

    def ping(self) -> bool:
        try:
            with self._connect("ping evaluation store") as conn:
                conn.execute("SELECT 1 FROM evaluations LIMIT 1")
        except StorageError:
            return False
        return True


def _to_record(row: sqlite3.Row) -> StoredEvaluation:
    metrics = None
    if row["zone"] is not None:
        metrics = EvaluationMetrics(
            clarity_score=row["clarity_score"],
            capability_score=row["capability_score"],
            objectivity_score=row["objectivity_score"],
            data_score=row["data_score"],
            tolerance_score=row["tolerance_score"],
            matrix_x=row["matrix_x"],
            matrix_y=row["matrix_y"],
            zone=row["zone"],
            suggestions=json.loads(row["suggestions"]),
            risks=json.loads(row["risks"]),
            reasoning=row["reasoning"],
        )
    return StoredEvaluation(
        id=row["id"],
        user_id=row["user_id"],
        project_name=row["project_name"],
        description=row["description"],
        target_users=row["target_users"],
        features=json.loads(row["features"]),
        constraints=json.loads(row["constraints"]),
        model_id=row["model_id"],
        status=row["status"],
        total_score=row["total_score"],
        created_at=datetime.fromisoformat(row["created_at"]),
        completed_at=(
            datetime.fromisoformat(row["completed_at"])
            if row["completed_at"]
            else None
        ),
        metrics=metrics,
        source=row["source"],
    )
