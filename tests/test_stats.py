import pytest

from analytics.stats import (
    FiveNumberSummary,
    five_number_summary,
    pearson_correlation,
    percentage,
    round_half_up,
)


def test_pearson_empty_series_is_zero() -> None:
    assert pearson_correlation([], []) == 0.0


def test_pearson_without_variance_is_zero() -> None:
    assert pearson_correlation([1, 1, 1], [5, 2, 9]) == 0.0
    assert pearson_correlation([5, 2, 9], [3, 3, 3]) == 0.0


def test_pearson_constant_float_series_is_zero() -> None:
    assert pearson_correlation([0.7] * 3, [7.1] * 3) == 0.0
    assert pearson_correlation([6.3] * 7, range(7)) == 0.0
    assert pearson_correlation(range(5), [0.1] * 5) == 0.0


def test_pearson_stays_within_unit_interval() -> None:
    for scale in (0.1, 0.3, 0.7, 1.1, 1e6 + 0.1):
        x = [scale * i for i in range(9)]
        y = [3.0 - scale * i for i in range(9)]
        assert -1.0 <= pearson_correlation(x, x) <= 1.0
        assert -1.0 <= pearson_correlation(x, y) <= 1.0


def test_pearson_perfect_positive_and_negative() -> None:
    assert pearson_correlation([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
    assert pearson_correlation([1, 2, 3], [6, 4, 2]) == pytest.approx(-1.0)


def test_pearson_rejects_unequal_lengths() -> None:
    with pytest.raises(ValueError):
        pearson_correlation([1, 2], [1, 2, 3])


def test_five_number_summary_empty_is_zero_filled() -> None:
    assert five_number_summary([]) == FiveNumberSummary(0, 0, 0, 0, 0)


def test_five_number_summary_uses_floor_indexing() -> None:
    summary = five_number_summary([8, 3, 5, 1, 7, 2, 6, 4])
    assert summary.min == 1
    assert summary.q1 == 3  # sorted[floor(8 * 0.25)] = sorted[2]
    assert summary.median == 5  # sorted[4]
    assert summary.q3 == 7  # sorted[6]
    assert summary.max == 8


def test_five_number_summary_four_values_picks_index_one() -> None:
    summary = five_number_summary([10, 40, 20, 30])
    assert summary.q1 == 20
    assert summary.median == 30
    assert summary.q3 == 40


def test_five_number_summary_does_not_mutate_input() -> None:
    values = [3, 1, 2]
    five_number_summary(values)
    assert values == [3, 1, 2]


def test_round_half_up_rounds_halves_away_from_even() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(62.5) == 63
    assert round_half_up(6.25, 1) == 6.3
    assert round_half_up(-1.0, 2) == -1.0


def test_percentage_of_empty_whole_is_zero() -> None:
    assert percentage(3, 0) == 0.0
    assert percentage(1, 3, 1) == 33.3
