from __future__ import annotations

import pytest

from areto.core.services.statistics import round_half_up, success_rate, updated_average


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.0, 0), (49.4, 49), (50.5, 51), (66.66, 67), (33.33, 33), (2.5, 3), (100.0, 100)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_success_rate():
    assert success_rate(1, 2) == 50
    assert success_rate(2, 3) == pytest.approx(66.666, rel=1e-3)


def test_first_play_takes_attempt_rate():
    assert updated_average(0, 1, 66.666) == 67


def test_previous_average_weighted_by_plays_minus_one():
    # (80 * 3 + 40) / 4 = 70
    assert updated_average(80, 4, 40) == 70
    # (50 * 1 + 100) / 2 = 75
    assert updated_average(50, 2, 100) == 75
