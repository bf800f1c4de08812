from dataclasses import asdict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/_debug/config")
def debug_config(request: Request):
    cfg = request.app.state.engine_config
    settings = request.app.state.settings
    return {
        "engine": asdict(cfg),
        "logs_dir": settings.LOGS_DIR,
        "sinks": settings.sinks(),
        "note": "Do not expose this in production without auth.",
    }


@router.get("/_debug/alerts")
async def list_recent_alerts(request: Request, limit: int = 50):
    am = getattr(request.app.state, "alerts", None)
    if am is None:
        return []
    return am.recent(limit=limit)


@router.get("/version")
def version(request: Request):
    return {"app": "Hit-Mon", "version": request.app.state.settings.APP_VERSION}
