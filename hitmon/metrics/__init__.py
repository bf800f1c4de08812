# hitmon/metrics/__init__.py
"""
Thin re-export layer; all collectors live in hitmon.metrics.registry.
"""
from .registry import (
    METRICS_REGISTRY,
    HITS_INGESTED,
    ANALYSIS_OUTCOMES,
    SIGNATURE_REJECTIONS,
    ALERTS_EMITTED,
    ALERT_DELIVERY_FAILURES,
    ANALYSIS_LATENCY,
    get_metrics,
)

__all__ = [
    "METRICS_REGISTRY",
    "HITS_INGESTED",
    "ANALYSIS_OUTCOMES",
    "SIGNATURE_REJECTIONS",
    "ALERTS_EMITTED",
    "ALERT_DELIVERY_FAILURES",
    "ANALYSIS_LATENCY",
    "get_metrics",
]
