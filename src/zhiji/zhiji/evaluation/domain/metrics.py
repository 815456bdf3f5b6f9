"""EvaluationMetrics — the scored feasibility record for one project."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zhiji.evaluation.domain.zone import Zone

SCORE_MIN = 0
SCORE_MAX = 100

Score = Annotated[int, Field(ge=SCORE_MIN, le=SCORE_MAX)]


def clamp_score(value: float) -> int:
    """Clamp *value* into [0, 100] and round half-up to an integer."""
    bounded = min(max(value, SCORE_MIN), SCORE_MAX)
    return int(Decimal(str(bounded)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class EvaluationMetrics(BaseModel):
    """Immutable metrics produced either from a model reply or the fallback estimator.

    Construction rejects out-of-range numbers; callers holding untrusted values
    clamp them with ``clamp_score`` first.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    clarity_score: Score
    capability_score: Score
    objectivity_score: Score
    data_score: Score
    tolerance_score: Score
    matrix_x: Score = Field(description="Technical difficulty")
    matrix_y: Score = Field(description="Business value")
    zone: Zone
    suggestions: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    reasoning: str = ""
