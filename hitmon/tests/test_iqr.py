import math
import random

import pytest

from hitmon.anomaly import EmptyWindowError, detect_outliers, is_outlier


def test_positional_quartiles_even_count():
    b = detect_outliers([8, 1, 7, 2, 6, 3, 5, 4])
    # Q1 = sorted[2], Q3 = sorted[6]
    assert (b.q1, b.q3) == (3, 7)
    assert b.iqr == 4
    assert (b.lower, b.upper) == (-3.0, 13.0)


def test_positional_quartiles_asymmetric_ceil():
    b = detect_outliers([5, 1, 4, 2, 3])
    # Q1 = sorted[floor(5/4)] = sorted[1], Q3 = sorted[ceil(15/4)] = sorted[4]
    assert (b.q1, b.q3) == (2, 5)
    assert (b.lower, b.upper) == (-2.5, 9.5)


def test_four_zone_percentages():
    b = detect_outliers([25.0, 25.0, 100 / 3, 50 / 3])
    assert b.q1 == 25.0
    assert b.q3 == pytest.approx(100 / 3)
    assert b.upper == pytest.approx(100 / 3 + 1.5 * (100 / 3 - 25.0))


@pytest.mark.parametrize("values", [[7.0], [40.0, 60.0], [1.0, 2.0, 3.0]])
def test_small_inputs_have_no_q3_and_flag_nothing(values):
    b = detect_outliers(values)
    assert (b.lower, b.upper) == (-math.inf, math.inf)
    assert math.isnan(b.q3)
    assert b.lower <= b.upper
    for v in (-1e9, 0.0, 50.0, 100.0, 1e9):
        assert not is_outlier(v, b.lower, b.upper)


def test_empty_values_raise():
    with pytest.raises(EmptyWindowError):
        detect_outliers([])


def test_is_outlier_is_strict():
    assert not is_outlier(10.0, 10.0, 20.0)
    assert not is_outlier(20.0, 10.0, 20.0)
    assert is_outlier(9.99, 10.0, 20.0)
    assert is_outlier(20.01, 10.0, 20.0)


def test_bounds_ordered_and_inner_values_never_flagged():
    rnd = random.Random(7)
    for _ in range(300):
        values = [rnd.uniform(0, 100) for _ in range(rnd.randint(1, 12))]
        b = detect_outliers(values)
        assert b.lower <= b.upper
        for v in values:
            if b.q1 < v < b.q3:
                assert not is_outlier(v, b.lower, b.upper)
