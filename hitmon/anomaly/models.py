from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence

from hitmon.anomaly.zones import Zone

DistributionStats = Dict[Zone, float]
MedianStats = Dict[Zone, float]

THRESHOLD_TITLE = "Threshold in hit zone reached"
OUTLIER_TITLE = "Outlier in hit zone detected"


class EmptyWindowError(ValueError):
    """Statistics were requested over a window with no events."""


@dataclass(frozen=True)
class Event:
    """A single logged hit."""

    zone: str
    distance: float
    actor_id: str
    subject_name: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Event":
        # webhook gövdesi murderer_id/murderer anahtarlarıyla gelir
        actor = record.get("murderer_id", record.get("actor_id"))
        name = record.get("murderer", record.get("subject_name")) or ""
        if actor is None or "zone" not in record or "distance" not in record:
            raise KeyError("record is missing one of zone, distance, murderer_id")
        return cls(
            zone=str(record["zone"]),
            distance=float(record["distance"]),
            actor_id=str(actor),
            subject_name=str(name),
        )


@dataclass(frozen=True)
class ThresholdSpec:
    zone: Zone
    value: float


@dataclass(frozen=True)
class EngineConfig:
    """
    Explicit configuration for decide():
      - short_term_size: K, analysis runs once every K logged events
      - min_short_term_entries: required events after distance filtering
      - min_distance: short-term events closer than this are dropped
    """
    short_term_size: int
    min_short_term_entries: int
    min_distance: float = 0.0
    short_term_thresholds: Sequence[ThresholdSpec] = ()
    long_term_thresholds: Sequence[ThresholdSpec] = ()

    def __post_init__(self):
        if self.short_term_size < 1:
            raise ValueError("short_term_size must be >= 1")
        if self.min_short_term_entries < 0:
            raise ValueError("min_short_term_entries must be >= 0")
        object.__setattr__(self, "short_term_thresholds", tuple(self.short_term_thresholds))
        object.__setattr__(self, "long_term_thresholds", tuple(self.long_term_thresholds))


class SuppressionReason(str, Enum):
    BATCH_BOUNDARY = "batch_boundary"
    INSUFFICIENT_SHORT_TERM = "insufficient_short_term"


@dataclass(frozen=True)
class Suppressed:
    reason: SuppressionReason
    log_size: int
    short_term_size: Optional[int] = None


@dataclass(frozen=True)
class AlertDecision:
    fired: bool
    title: str
    threshold_zones: FrozenSet[Zone]
    outlier_zones: FrozenSet[Zone]
    short_term_stats: DistributionStats
    long_term_stats: DistributionStats
    short_term_medians: MedianStats
    long_term_medians: MedianStats
    short_term_count: int = 0
    long_term_count: int = 0
    actor_id: str = ""
    subject_name: str = ""
    flagged_zones: FrozenSet[Zone] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "flagged_zones", frozenset(self.threshold_zones | self.outlier_zones))
