"""Metrics parser — turns an untrusted model reply into EvaluationMetrics."""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from zhiji.evaluation.domain.metrics import EvaluationMetrics, clamp_score
from zhiji.evaluation.domain.zone import classify_zone, parse_zone

# Wire key -> EvaluationMetrics field. All of these must be present and numeric.
_REQUIRED_NUMERIC_FIELDS: dict[str, str] = {
    "clarityScore": "clarity_score",
    "capabilityScore": "capability_score",
    "objectivityScore": "objectivity_score",
    "dataScore": "data_score",
    "toleranceScore": "tolerance_score",
    "matrixX": "matrix_x",
    "matrixY": "matrix_y",
}


@dataclass(frozen=True)
class ParseFailure:
    """The reply could not be turned into metrics; ``reason`` says why."""

    reason: str


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def parse_metrics(raw: Any) -> EvaluationMetrics | ParseFailure:
    """Validate and normalise a decoded model reply.

    Numeric fields are clamped into [0, 100] rather than rejected. Missing
    suggestions, risks or reasoning default to empty values; a missing or
    unrecognised zone is derived from the matrix coordinates. Any absent or
    non-numeric score or coordinate makes the whole reply a ParseFailure.
    """
    if not isinstance(raw, Mapping):
        return ParseFailure(reason=f"expected a JSON object, got {type(raw).__name__}")

    scores: dict[str, int] = {}
    invalid: list[str] = []
    for key, field_name in _REQUIRED_NUMERIC_FIELDS.items():
        number = _as_number(raw.get(key))
        if number is None:
            invalid.append(key)
        else:
            scores[field_name] = clamp_score(number)

    if invalid:
        return ParseFailure(
            reason=f"missing or non-numeric fields: {', '.join(invalid)}"
        )

    zone = parse_zone(raw.get("zone")) or classify_zone(
        scores["matrix_x"], scores["matrix_y"]
    )
    reasoning = raw.get("reasoning")

    try:
        return EvaluationMetrics(
            **scores,
            zone=zone,
            suggestions=_as_text_list(raw.get("suggestions")),
            risks=_as_text_list(raw.get("risks")),
            reasoning=reasoning.strip() if isinstance(reasoning, str) else "",
        )
    except ValidationError as exc:
        return ParseFailure(reason=str(exc))
