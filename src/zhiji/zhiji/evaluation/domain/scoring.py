"""Score aggregation — combines the five sub-scores into one weighted total."""

from decimal import ROUND_HALF_UP, Decimal

from zhiji.config.domain.scoring import DEFAULT_WEIGHTS, ScoreWeights
from zhiji.evaluation.domain.metrics import EvaluationMetrics


def aggregate(
    metrics: EvaluationMetrics, weights: ScoreWeights = DEFAULT_WEIGHTS
) -> int:
    """Return the weighted total of *metrics*, rounded half-up to an integer.

    Weights are converted through their decimal string form so that, for
    example, 30 * 0.15 is exactly 4.5 and rounds to 5.
    """
    weighted = (
        (metrics.clarity_score, weights.clarity),
        (metrics.capability_score, weights.capability),
        (metrics.objectivity_score, weights.objectivity),
        (metrics.data_score, weights.data),
        (metrics.tolerance_score, weights.tolerance),
    )
    total = sum(
        (Decimal(score) * Decimal(str(weight)) for score, weight in weighted),
        Decimal("0"),
    )
    return int(total.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
