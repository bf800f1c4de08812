from __future__ import annotations
from typing import Dict, List, Sequence

from hitmon.anomaly.models import Event, MedianStats
from hitmon.anomaly.zones import Zone, classify


def median(values: Sequence[float]) -> float:
    ordered = sorted(values)
    n = len(ordered)
    if n == 0:
        raise ValueError("median of an empty sequence")
    mid = n // 2
    if n % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def compute_medians(events: Sequence[Event]) -> MedianStats:
    """Median struck distance per zone; zones without hits are left out."""
    buckets: Dict[Zone, List[float]] = {}
    for ev in events:
        buckets.setdefault(classify(ev.zone), []).append(ev.distance)
    return {z: median(d) for z, d in buckets.items()}
