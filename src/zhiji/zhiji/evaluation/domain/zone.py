"""Zone — categorical placement on the technical-difficulty × business-value matrix."""

from enum import StrEnum


class Zone(StrEnum):
    OPTIMAL = "optimal"
    EASY = "easy"
    CHALLENGE = "challenge"
    INFEASIBLE = "infeasible"
    OVER_INVESTMENT = "over-investment"


_HARD_DIFFICULTY = 80
_EASY_DIFFICULTY = 40
_HIGH_VALUE = 60
_LOW_VALUE = 40


def classify_zone(matrix_x: int, matrix_y: int) -> Zone:
    """Map a (difficulty, value) matrix position onto a Zone.

    Very hard projects are a ``challenge`` when valuable enough to justify the
    effort and ``infeasible`` otherwise. Below that, low business value means
    ``over-investment``, low difficulty means ``easy``, and the remaining
    middle band is ``optimal``.
    """
    if matrix_x >= _HARD_DIFFICULTY:
        return Zone.CHALLENGE if matrix_y >= _HIGH_VALUE else Zone.INFEASIBLE
    if matrix_y < _LOW_VALUE:
        return Zone.OVER_INVESTMENT
    if matrix_x < _EASY_DIFFICULTY:
        return Zone.EASY
    return Zone.OPTIMAL


def parse_zone(value: object) -> Zone | None:
    """Return the Zone named by *value*, tolerating case, spaces and underscores."""
    if not isinstance(value, str):
        return None
    normalised = value.strip().lower().replace("_", "-").replace(" ", "-")
    try:
        return Zone(normalised)
    except ValueError:
        return None
