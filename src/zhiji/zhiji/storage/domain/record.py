"""StoredEvaluation — a persisted submission together with its metrics."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zhiji.evaluation.domain.metrics import EvaluationMetrics
from zhiji.evaluation.domain.result import MetricsSource


class EvaluationStatus(StrEnum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class StoredEvaluation(BaseModel):
    """Read model for one evaluation row and its (optional) metrics row."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )

    id: str = Field(min_length=1)
    user_id: str
    project_name: str
    description: str
    target_users: str | None = None
    features: list[str] = Field(default_factory=list)
    constraints: list[str] = Field(default_factory=list)
    model_id: str
    status: EvaluationStatus
    total_score: int | None = None
    created_at: datetime
    completed_at: datetime | None = None
    metrics: EvaluationMetrics | None = None
    source: MetricsSource | None = None
