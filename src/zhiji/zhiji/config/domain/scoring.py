"""Score weight configuration model."""

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

_WEIGHT_TOTAL = Decimal("1.00")


class ScoreWeights(BaseModel, frozen=True):
    """Weights applied to the five sub-scores. Must sum to exactly 1.00."""

    clarity: float = Field(ge=0.0, le=1.0)
    capability: float = Field(ge=0.0, le=1.0)
    objectivity: float = Field(ge=0.0, le=1.0)
    data: float = Field(ge=0.0, le=1.0)
    tolerance: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_total(self) -> "ScoreWeights":
        total = sum(
            (
                Decimal(str(weight))
                for weight in (
                    self.clarity,
                    self.capability,
                    self.objectivity,
                    self.data,
                    self.tolerance,
                )
            ),
            Decimal("0"),
        )
        if total != _WEIGHT_TOTAL:
            raise ValueError(f"score weights must sum to 1.00, got {total}")
        return self


DEFAULT_WEIGHTS = ScoreWeights(
    clarity=0.20,
    capability=0.30,
    objectivity=0.15,
    data=0.20,
    tolerance=0.15,
)


class ScoringConfig(BaseModel, frozen=True):
    weights: ScoreWeights = DEFAULT_WEIGHTS
