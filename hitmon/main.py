from dotenv import load_dotenv
load_dotenv()  # .env'yi settings okunmadan önce yükle

# hitmon/main.py
import logging

from fastapi import FastAPI
from starlette.responses import JSONResponse

from hitmon.alerts import AlertManager, build_sinks
from hitmon.api.routes_debug import router as debug_router
from hitmon.api.routes_hits import router as hits_router
from hitmon.api.routes_metrics import router as metrics_router
from hitmon.api.routes_stats import router as stats_router
from hitmon.core.settings import get_settings
from hitmon.persistence.log_store import LogStore

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("hitmon")

# --- Ana app

app = FastAPI(title="Hit-Mon")

app.state.settings = settings
app.state.engine_config = settings.engine_config()
app.state.log_store = LogStore(settings.LOGS_DIR)

# ---- ALERTS: tek instance, sink'ler ALERT_SINKS'ten
app.state.alerts = AlertManager(keep_recent=settings.ALERT_KEEP_RECENT)
for _sink in build_sinks(settings):
    app.state.alerts.register(_sink)

logger.info(
    "loaded configuration: logs_dir=%s engine=%s sinks=%s",
    settings.LOGS_DIR, app.state.engine_config, settings.sinks(),
)


@app.get("/health")
def health():
    return JSONResponse({"status": "ok"})


app.include_router(hits_router)
app.include_router(stats_router)
app.include_router(metrics_router)
app.include_router(debug_router)


def run() -> None:
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
