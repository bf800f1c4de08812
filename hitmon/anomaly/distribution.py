from __future__ import annotations
from typing import Dict, Iterable, Sequence

from hitmon.anomaly.models import DistributionStats, EmptyWindowError, Event
from hitmon.anomaly.zones import Zone, classify


def zone_counts(events: Iterable[Event]) -> Dict[Zone, int]:
    counts: Dict[Zone, int] = {}
    for ev in events:
        z = classify(ev.zone)
        counts[z] = counts.get(z, 0) + 1
    return counts


def compute_distribution(events: Sequence[Event]) -> DistributionStats:
    """
    Percentage of hits per zone over the given window.

    Zones appear in order of first occurrence. Values stay full precision;
    rounding is left to the renderer, so they only sum to 100 within float
    tolerance. Raises EmptyWindowError for an empty window.
    """
    counts = zone_counts(events)
    total = sum(counts.values())
    if total == 0:
        raise EmptyWindowError("cannot compute a distribution over an empty window")
    return {z: c / total * 100 for z, c in counts.items()}
