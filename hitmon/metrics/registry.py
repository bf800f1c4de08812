from __future__ import annotations
from prometheus_client import CollectorRegistry, Counter, Histogram

# tek registry; app reload'larında modül yeniden import edilmediği için tekrar kayıt olmaz
METRICS_REGISTRY = CollectorRegistry()

HITS_INGESTED = Counter(
    "hits_ingested_total",
    "Hit events appended to an actor log",
    registry=METRICS_REGISTRY,
)
ANALYSIS_OUTCOMES = Counter(
    "analysis_outcomes_total",
    "Alert decisions by outcome",
    ["outcome"],
    registry=METRICS_REGISTRY,
)
SIGNATURE_REJECTIONS = Counter(
    "signature_rejections_total",
    "Webhook deliveries rejected because of a signature mismatch",
    registry=METRICS_REGISTRY,
)
ALERTS_EMITTED = Counter(
    "alerts_emitted_total",
    "Alerts delivered per sink",
    ["sink"],
    registry=METRICS_REGISTRY,
)
ALERT_DELIVERY_FAILURES = Counter(
    "alert_delivery_failures_total",
    "Alert deliveries that failed per sink",
    ["sink"],
    registry=METRICS_REGISTRY,
)
ANALYSIS_LATENCY = Histogram(
    "analysis_latency_seconds",
    "Time spent appending, re-reading and analysing one hit",
    registry=METRICS_REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

for _outcome in ("batch_boundary", "insufficient_short_term", "no_alert", "alert"):
    ANALYSIS_OUTCOMES.labels(outcome=_outcome).inc(0)


def get_metrics() -> dict[str, object]:
    return {
        "registry": METRICS_REGISTRY,
        "hits": HITS_INGESTED,
        "outcomes": ANALYSIS_OUTCOMES,
        "signature": SIGNATURE_REJECTIONS,
        "emitted": ALERTS_EMITTED,
        "failures": ALERT_DELIVERY_FAILURES,
        "latency": ANALYSIS_LATENCY,
    }
