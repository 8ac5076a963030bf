"""Arithmetic behind the per-quiz running statistics."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round`` uses banker's rounding, which would drift the stored
    averages away from what players have always seen (``round(50.5) == 50``).
    """
    return math.floor(value + 0.5)


def success_rate(score: int, total_questions: int) -> float:
    """Percentage of correct answers for one attempt."""
    return score / total_questions * 100


def updated_average(previous_average: float, total_plays: int, attempt_rate: float) -> int:
    """Fold one attempt into a running average.

    ``total_plays`` is the play count *after* the new attempt was counted, so
    the previous average carries a weight of ``total_plays - 1``.
    """
    current_total = previous_average * (total_plays - 1)
    return round_half_up((current_total + attempt_rate) / total_plays)
