"""EvaluationResult — the complete output of one pipeline run."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zhiji.evaluation.domain.metrics import SCORE_MAX, SCORE_MIN, EvaluationMetrics
from zhiji.evaluation.domain.recommendation import Recommendation, recommend


class MetricsSource(StrEnum):
    """Which path produced the metrics."""

    MODEL = "model"
    FALLBACK = "fallback"


class EvaluationResult(BaseModel):
    """Metrics plus the total score derived from them.

    Produced once per input and handed to the caller for persistence; it is
    never partially filled.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    metrics: EvaluationMetrics
    total_score: int = Field(ge=SCORE_MIN, le=SCORE_MAX)
    source: MetricsSource

    @property
    def recommendation(self) -> Recommendation:
        return recommend(self.total_score)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready form: camelCase metrics with sibling totals."""
        return {
            "metrics": self.metrics.model_dump(mode="json", by_alias=True),
            "totalScore": self.total_score,
            "recommendation": self.recommendation.value,
            "source": self.source.value,
        }
