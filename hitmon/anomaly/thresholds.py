from __future__ import annotations
from typing import FrozenSet, Iterable, Mapping

from hitmon.anomaly.models import ThresholdSpec
from hitmon.anomaly.zones import Zone, classify


def evaluate(stats: Mapping[Zone, float], specs: Iterable[ThresholdSpec]) -> FrozenSet[Zone]:
    """Zones whose percentage meets or exceeds their configured limit (missing zones count as 0)."""
    reached = set()
    for spec in specs:
        zone = classify(spec.zone)
        if stats.get(zone, 0.0) >= spec.value:
            reached.add(zone)
    return frozenset(reached)
