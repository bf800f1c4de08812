from __future__ import annotations
import asyncio
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Request

from hitmon.anomaly import compute_distribution, compute_medians, evaluate, short_term_window
from hitmon.anomaly.zones import ZONE_ORDER
from hitmon.persistence.log_store import PersistenceFailure

router = APIRouter(prefix="/stats", tags=["stats"])


def _window_summary(events, thresholds) -> Dict[str, Any]:
    dist = compute_distribution(events)
    medians = compute_medians(events)
    return {
        "count": len(events),
        # yuvarlama sadece sunum katmanında
        "distribution": {z.value: round(dist[z], 2) for z in ZONE_ORDER if z in dist},
        "medians": {z.value: medians[z] for z in ZONE_ORDER if z in medians},
        "threshold_reached": sorted(z.value for z in evaluate(dist, thresholds)),
    }


@router.get("/{actor_id}")
async def actor_stats(actor_id: str, request: Request):
    """
    Current statistics for an actor without triggering any alert.
    short_term is null when the distance-filtered window is empty.
    """
    store = request.app.state.log_store
    cfg = request.app.state.engine_config
    try:
        events = await asyncio.to_thread(store.read, actor_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid actor id")
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=f"log store failure: {e}")
    if not events:
        raise HTTPException(status_code=404, detail="no hits logged for actor")

    short = short_term_window(events, cfg)
    short_summary: Optional[Dict[str, Any]] = _window_summary(short, cfg.short_term_thresholds) if short else None
    return {
        "actor_id": actor_id,
        "subject_name": events[-1].subject_name,
        "short_term": short_summary,
        "long_term": _window_summary(events, cfg.long_term_thresholds),
        "next_analysis_in": (-len(events)) % cfg.short_term_size,
    }
