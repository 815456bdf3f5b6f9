"""Recommendation verdict derived from a total feasibility score."""

from enum import StrEnum


class Recommendation(StrEnum):
    STRONGLY_RECOMMENDED = "strongly_recommended"
    PROCEED_WITH_CAUTION = "proceed_with_caution"
    NOT_RECOMMENDED = "not_recommended"


STRONG_THRESHOLD = 85
CAUTION_THRESHOLD = 70


def recommend(total_score: int) -> Recommendation:
    if total_score >= STRONG_THRESHOLD:
        return Recommendation.STRONGLY_RECOMMENDED
    if total_score >= CAUTION_THRESHOLD:
        return Recommendation.PROCEED_WITH_CAUTION
    return Recommendation.NOT_RECOMMENDED
