# hitmon/api/routes_hits.py
from __future__ import annotations
import asyncio
import logging
import time
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request, Response, status
from pydantic import BaseModel, ConfigDict, Field, ValidationError, constr

from hitmon.alerts import make_payload
from hitmon.anomaly import AlertDecision, Suppressed, decide
from hitmon.metrics import ANALYSIS_LATENCY, ANALYSIS_OUTCOMES, HITS_INGESTED, SIGNATURE_REJECTIONS
from hitmon.persistence.log_store import PersistenceFailure
from hitmon.security.signature import VERIFICATION_EVENT, verify_signature

logger = logging.getLogger(__name__)

router = APIRouter(tags=["hits"])

_ActorId = constr(strip_whitespace=True, pattern=r"^[A-Za-z0-9_-]{1,128}$")


class HitIn(BaseModel):
    """Webhook body; unknown keys are kept and logged as they came in."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    actor_id: _ActorId = Field(alias="murderer_id")
    subject_name: str = Field("", alias="murderer")
    zone: str
    distance: float


def record_outcome(decision) -> str:
    if isinstance(decision, Suppressed):
        outcome = decision.reason.value
    elif decision.fired:
        outcome = "alert"
    else:
        outcome = "no_alert"
    ANALYSIS_OUTCOMES.labels(outcome=outcome).inc()
    return outcome


@router.post("/", status_code=status.HTTP_204_NO_CONTENT)
async def receive_hit(
    request: Request,
    x_hephaistos_signature: Optional[str] = Header(None),
    x_hephaistos_delivery: Optional[str] = Header(None),
    x_hephaistos_event: Optional[str] = Header(None),
):
    settings = request.app.state.settings

    if x_hephaistos_event == VERIFICATION_EVENT:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    if not verify_signature(x_hephaistos_delivery, x_hephaistos_signature, settings.WEBHOOK_SECRET):
        SIGNATURE_REJECTIONS.inc()
        logger.warning("signature mismatch for delivery %s", x_hephaistos_delivery)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="signature mismatch")

    try:
        hit = HitIn.model_validate(await request.json())
    except ValueError as e:
        # ValidationError ve bozuk JSON ikisi de ValueError
        detail = e.errors(include_url=False) if isinstance(e, ValidationError) else "invalid json body"
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)

    started = time.perf_counter()
    record = hit.model_dump(by_alias=True)
    try:
        try:
            events = await asyncio.to_thread(request.app.state.log_store.append_and_read, hit.actor_id, record)
        except PersistenceFailure as e:
            logger.error("error writing to log file: %s", e)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="log store failure")
        HITS_INGESTED.inc()
        logger.info("saved log entry for %s (%d total)", hit.actor_id, len(events))

        decision = decide(events, request.app.state.engine_config)
        outcome = record_outcome(decision)
        if isinstance(decision, Suppressed):
            logger.info("analysis skipped for %s: %s", hit.actor_id, outcome)
        elif isinstance(decision, AlertDecision) and decision.fired:
            url = settings.PROFILE_URL_TEMPLATE.format(actor_id=decision.actor_id)
            failed = await request.app.state.alerts.emit(make_payload(decision, profile_url=url))
            logger.info("alert %r for %s sent (failed sinks: %s)", decision.title, hit.actor_id, failed or "none")
    finally:
        # 500 dönen istekler de histograma girer
        ANALYSIS_LATENCY.observe(time.perf_counter() - started)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
