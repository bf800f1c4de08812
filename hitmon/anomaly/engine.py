from __future__ import annotations
import logging
from typing import List, Sequence, Union

from hitmon.anomaly.distribution import compute_distribution
from hitmon.anomaly.iqr import detect_outliers, is_outlier
from hitmon.anomaly.medians import compute_medians
from hitmon.anomaly.models import (
    OUTLIER_TITLE,
    THRESHOLD_TITLE,
    AlertDecision,
    EngineConfig,
    Event,
    Suppressed,
    SuppressionReason,
)
from hitmon.anomaly.thresholds import evaluate

logger = logging.getLogger(__name__)

Decision = Union[AlertDecision, Suppressed]


def short_term_window(log: Sequence[Event], config: EngineConfig) -> List[Event]:
    """Last K events with distance >= min_distance (may come back shorter than K)."""
    k = config.short_term_size
    recent = list(log[-k:])
    kept = [ev for ev in recent if ev.distance >= config.min_distance]
    return kept[-k:]


def decide(log: Sequence[Event], config: EngineConfig) -> Decision:
    """
    Run the hit-zone analysis over an actor's full log.

    Analysis only happens when the log size is a multiple of K; the short-term
    window must keep at least min_short_term_entries events after distance
    filtering. Thresholds from both windows are merged. IQR outliers of the
    short-term distribution against the long-term one are only looked for once
    the log holds more than 2K events, and an outlier title wins over a
    threshold title.
    """
    n = len(log)
    k = config.short_term_size
    if n == 0 or n % k != 0:
        return Suppressed(SuppressionReason.BATCH_BOUNDARY, log_size=n)

    short = short_term_window(log, config)
    if len(short) < max(config.min_short_term_entries, 1):
        logger.info(
            "not enough short-term entries after min_distance filter (%d < %d), skipping",
            len(short), config.min_short_term_entries,
        )
        return Suppressed(SuppressionReason.INSUFFICIENT_SHORT_TERM, log_size=n, short_term_size=len(short))

    short_stats = compute_distribution(short)
    short_medians = compute_medians(short)
    long_stats = compute_distribution(log)
    long_medians = compute_medians(log)

    reached = evaluate(short_stats, config.short_term_thresholds) | evaluate(long_stats, config.long_term_thresholds)

    title = ""
    if reached:
        logger.info("threshold reached for zones %s", sorted(z.value for z in reached))
        title = THRESHOLD_TITLE

    outliers = frozenset()
    if n > 2 * k:
        bounds = detect_outliers(list(long_stats.values()))
        outliers = frozenset(z for z, pct in short_stats.items() if is_outlier(pct, bounds.lower, bounds.upper))
        if outliers:
            logger.info(
                "outliers detected for zones %s (bounds %.2f..%.2f)",
                sorted(z.value for z in outliers), bounds.lower, bounds.upper,
            )
            title = OUTLIER_TITLE

    last = log[-1]
    return AlertDecision(
        fired=bool(title),
        title=title,
        threshold_zones=reached,
        outlier_zones=outliers,
        short_term_stats=short_stats,
        long_term_stats=long_stats,
        short_term_medians=short_medians,
        long_term_medians=long_medians,
        short_term_count=len(short),
        long_term_count=n,
        actor_id=last.actor_id,
        subject_name=last.subject_name,
    )
