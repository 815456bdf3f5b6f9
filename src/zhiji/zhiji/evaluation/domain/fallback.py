"""FallbackEstimator — heuristic metrics used when the model gives no usable answer."""

import random
from dataclasses import dataclass

from zhiji.evaluation.domain.input import EvaluationInput
from zhiji.evaluation.domain.metrics import EvaluationMetrics, clamp_score
from zhiji.evaluation.domain.zone import classify_zone

DETAILED_DESCRIPTION_LENGTH = 50
DETAILED_BASE = 70
BRIEF_BASE = 50
FEATURE_BONUS = 10


@dataclass(frozen=True)
class _Band:
    """A score drawn as ``floor + jitter`` with jitter uniform in [0, spread)."""

    floor: int
    spread: int


_CAPABILITY = _Band(floor=75, spread=15)
_DATA = _Band(floor=60, spread=20)
_TOLERANCE = _Band(floor=70, spread=15)
_MATRIX_X = _Band(floor=45, spread=30)
_MATRIX_Y = _Band(floor=60, spread=30)
_CLARITY_SPREAD = 10
_OBJECTIVITY_SPREAD = 20

FALLBACK_SUGGESTIONS: tuple[str, ...] = (
    "Define clear priorities for the core features.",
    "Develop incrementally and validate an MVP first.",
    "Add a mechanism for collecting user feedback.",
    "Consider combining several AI models to improve accuracy.",
)
FALLBACK_RISKS: tuple[str, ...] = (
    "Model response latency may hurt the user experience.",
    "Ongoing model tuning and optimisation add recurring cost.",
    "Data privacy and security compliance need close attention.",
)
FALLBACK_REASONING = (
    "The project shows clear business value and technical feasibility. Current AI "
    "technology can support its core features, but performance and cost need "
    "attention. Validate market demand quickly with an MVP."
)


class FallbackEstimator:
    """Produces plausible metrics from the input alone.

    Randomness comes only from the injected ``rng``; pass a seeded
    ``random.Random`` for reproducible results.
    """

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def estimate(self, evaluation_input: EvaluationInput) -> EvaluationMetrics:
        base = (
            DETAILED_BASE
            if len(evaluation_input.description) > DETAILED_DESCRIPTION_LENGTH
            else BRIEF_BASE
        )
        bonus = FEATURE_BONUS if evaluation_input.features else 0

        matrix_x = self._draw(_MATRIX_X)
        matrix_y = self._draw(_MATRIX_Y)

        return EvaluationMetrics(
            clarity_score=self._draw(_Band(floor=base + bonus, spread=_CLARITY_SPREAD)),
            capability_score=self._draw(_CAPABILITY),
            objectivity_score=self._draw(_Band(floor=base, spread=_OBJECTIVITY_SPREAD)),
            data_score=self._draw(_DATA),
            tolerance_score=self._draw(_TOLERANCE),
            matrix_x=matrix_x,
            matrix_y=matrix_y,
            zone=classify_zone(matrix_x, matrix_y),
            suggestions=list(FALLBACK_SUGGESTIONS),
            risks=list(FALLBACK_RISKS),
            reasoning=FALLBACK_REASONING,
        )

    def _draw(self, band: _Band) -> int:
        return clamp_score(band.floor + self._rng.randrange(band.spread))
