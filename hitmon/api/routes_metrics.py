from fastapi import APIRouter, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from hitmon.metrics import METRICS_REGISTRY

router = APIRouter()


@router.get("/metrics")
async def metrics():
    return Response(content=generate_latest(METRICS_REGISTRY), media_type=CONTENT_TYPE_LATEST)
