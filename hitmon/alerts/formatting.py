from __future__ import annotations
from typing import Any, Dict, Iterable, Mapping

from hitmon.alerts.base import AlertPayload
from hitmon.anomaly.zones import ZONE_ORDER

HEADER = "|Hit Zone        |%Hits  |Median Distance|\n"
FLAG_PREFIX = ">: "
MIN_HITS_WIDTH = 6
MIN_MEDIAN_WIDTH = 16


def _pct(stats: Mapping[str, float], zone: str) -> str:
    return f"{float(stats.get(zone, 0.0)):.1f}%"


def _median(medians: Mapping[str, float], zone: str) -> str:
    if zone not in medians:
        return "N/A"
    return f"{float(medians[zone]):.1f}m"


def format_stats(
    stats: Mapping[str, float],
    medians: Mapping[str, float],
    outliers: Iterable[str] = (),
    threshold_reached: Iterable[str] = (),
) -> str:
    """
    Fixed four-row table (head, brain, torso, others) of hit share and median
    distance. Rows of zones that crossed a threshold or were outliers get a
    '>: ' prefix so Discord renders them as a quote.
    """
    stats = {getattr(k, "value", k): v for k, v in stats.items()}
    medians = {getattr(k, "value", k): v for k, v in medians.items()}
    flagged = {getattr(z, "value", z) for z in outliers} | {getattr(z, "value", z) for z in threshold_reached}
    zones = [z.value for z in ZONE_ORDER]

    zone_w = max(len(z) for z in zones) + 2
    hits_w = max([len(_pct(stats, z)) for z in zones] + [MIN_HITS_WIDTH])
    median_w = max([len(_median(medians, z)) for z in zones] + [MIN_MEDIAN_WIDTH])

    out = HEADER
    for z in zones:
        row = f"| {('`' + z + '`'):<{zone_w}} | {_pct(stats, z):<{hits_w}} | {_median(medians, z):<{median_w}}|\n"
        if z in flagged:
            row = FLAG_PREFIX + row
        out += row
    return out


def build_embed(payload: AlertPayload) -> Dict[str, Any]:
    short_tbl = format_stats(
        payload.short_term_stats, payload.short_term_medians, payload.outlier_zones, payload.threshold_zones
    )
    long_tbl = format_stats(
        payload.long_term_stats, payload.long_term_medians, payload.outlier_zones, payload.threshold_zones
    )
    embed: Dict[str, Any] = {
        "title": payload.title,
        "description": f"Player: {payload.subject_name}",
        "fields": [
            {"name": "Short-term statistics", "value": short_tbl, "inline": False},
            {"name": "Number of short-term log entries", "value": str(payload.short_term_count), "inline": False},
            {"name": "Long-term statistics", "value": long_tbl, "inline": False},
            {"name": "Number of long-term log entries", "value": str(payload.long_term_count), "inline": False},
        ],
    }
    if payload.profile_url:
        embed["url"] = payload.profile_url
    return embed


def build_discord_message(payload: AlertPayload, role: str = "") -> Dict[str, Any]:
    # role verilmişse mesaj rolü pingler
    return {
        "content": f"<@&{role}>" if role else "",
        "embeds": [build_embed(payload)],
    }
