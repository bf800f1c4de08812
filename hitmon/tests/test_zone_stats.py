import math
import random

import pytest

from hitmon.anomaly import (
    EmptyWindowError,
    ThresholdSpec,
    Zone,
    classify,
    compute_distribution,
    compute_medians,
    evaluate,
)

RAW_ZONES = ["head", "brain", "torso", "leftarm", "rightleg", "", "HEAD", "others", "pelvis"]


def test_classify_known_and_fallback():
    assert classify("head") is Zone.HEAD
    assert classify("brain") is Zone.BRAIN
    assert classify("torso") is Zone.TORSO
    assert classify("leftleg") is Zone.OTHERS
    assert classify("Head") is Zone.OTHERS  # büyük/küçük harf duyarlı
    assert classify("") is Zone.OTHERS
    assert classify(None) is Zone.OTHERS


def test_classify_is_idempotent():
    for raw in RAW_ZONES:
        once = classify(raw)
        assert once in set(Zone)
        assert classify(once) is once


def test_distribution_percentages(make_events):
    events = make_events(("head", 10), ("head", 20), ("torso", 30), ("leftarm", 40))
    stats = compute_distribution(events)
    assert stats == {Zone.HEAD: 50.0, Zone.TORSO: 25.0, Zone.OTHERS: 25.0}
    # ilk görülme sırası korunur
    assert list(stats) == [Zone.HEAD, Zone.TORSO, Zone.OTHERS]


def test_distribution_keeps_full_precision(make_events):
    stats = compute_distribution(make_events(("head", 1), ("brain", 1), ("torso", 1)))
    assert stats[Zone.HEAD] == pytest.approx(100 / 3)
    assert stats[Zone.HEAD] != 33.33


def test_distribution_bounds_and_sum_on_random_windows(make_events):
    rnd = random.Random(1234)
    for _ in range(200):
        n = rnd.randint(1, 60)
        events = make_events(*[(rnd.choice(RAW_ZONES), rnd.uniform(0, 400)) for _ in range(n)])
        stats = compute_distribution(events)
        assert all(0.0 <= v <= 100.0 for v in stats.values())
        assert math.isclose(sum(stats.values()), 100.0, rel_tol=1e-9)


def test_distribution_empty_window_raises():
    with pytest.raises(EmptyWindowError):
        compute_distribution([])


def test_medians_odd_and_even(make_events):
    events = make_events(
        ("head", 30), ("head", 10), ("head", 20),
        ("torso", 40), ("torso", 10), ("torso", 30), ("torso", 20),
    )
    medians = compute_medians(events)
    assert medians == {Zone.HEAD: 20.0, Zone.TORSO: 25.0}
    assert Zone.BRAIN not in medians


def test_medians_match_positional_definition(make_events):
    rnd = random.Random(99)
    for _ in range(100):
        k = rnd.randint(1, 15)
        dists = [float(rnd.randint(0, 50)) for _ in range(k)]
        got = compute_medians(make_events(*[("brain", d) for d in dists]))[Zone.BRAIN]
        ordered = sorted(dists)
        if k % 2:
            assert got == ordered[k // 2]
        else:
            assert got == (ordered[k // 2 - 1] + ordered[k // 2]) / 2


def test_medians_empty_window_is_empty():
    assert compute_medians([]) == {}


def test_threshold_evaluate_uses_ge_and_missing_as_zero():
    stats = {Zone.HEAD: 40.0, Zone.TORSO: 60.0}
    specs = [
        ThresholdSpec(Zone.HEAD, 40.0),
        ThresholdSpec(Zone.TORSO, 60.5),
        ThresholdSpec(Zone.BRAIN, 0.0),
        ThresholdSpec(Zone.OTHERS, 1.0),
    ]
    assert evaluate(stats, specs) == {Zone.HEAD, Zone.BRAIN}
    assert evaluate(stats, list(reversed(specs))) == {Zone.HEAD, Zone.BRAIN}


def test_threshold_evaluate_no_specs():
    assert evaluate({Zone.HEAD: 100.0}, []) == frozenset()
