"""
Hit-zone statistics and the alert decision built on top of them.
Re-exports the public pieces so callers can `from hitmon.anomaly import decide`.
"""
from .zones import Zone, ZONE_ORDER, classify
from .models import (
    AlertDecision,
    EmptyWindowError,
    EngineConfig,
    Event,
    Suppressed,
    SuppressionReason,
    ThresholdSpec,
)
from .distribution import compute_distribution
from .medians import compute_medians
from .thresholds import evaluate
from .iqr import OutlierBounds, detect_outliers, is_outlier
from .engine import decide, short_term_window

__all__ = [
    "Zone",
    "ZONE_ORDER",
    "classify",
    "AlertDecision",
    "EmptyWindowError",
    "EngineConfig",
    "Event",
    "Suppressed",
    "SuppressionReason",
    "ThresholdSpec",
    "compute_distribution",
    "compute_medians",
    "evaluate",
    "OutlierBounds",
    "detect_outliers",
    "is_outlier",
    "decide",
    "short_term_window",
]
