import json, asyncio, logging, os
from dataclasses import asdict
from typing import Optional, Dict, List

import httpx

from hitmon.alerts.base import AlertPayload, AlertSink, DeliveryFailure
from hitmon.alerts.formatting import build_discord_message, format_stats

logger = logging.getLogger(__name__)


class StdoutSink(AlertSink):
    async def send(self, payload: AlertPayload) -> None:
        print(f"[ALERT] {payload.title} actor={payload.actor_id} player={payload.subject_name}")
        print(format_stats(payload.short_term_stats, payload.short_term_medians,
                           payload.outlier_zones, payload.threshold_zones), end="")


class FileSink(AlertSink):
    """
    Satır başı JSON yazar. Bloklamamak için yazımı thread'e offload eder.
    """
    def __init__(self, path: str):
        self.path = path
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)

    def _write(self, line: str) -> None:
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    async def send(self, payload: AlertPayload) -> None:
        line = json.dumps(asdict(payload), ensure_ascii=False)
        try:
            await asyncio.to_thread(self._write, line)
        except OSError as e:
            raise DeliveryFailure(f"could not write {self.path}: {e}") from e


class DiscordWebhookSink(AlertSink):
    """
    Posts the alert as a Discord embed. Non-2xx answers and transport errors
    become DeliveryFailure.
    """
    def __init__(self, url: str, role: str = "", headers: Optional[Dict[str, str]] = None,
                 timeout_sec: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url
        self.role = role
        self.headers = headers or {"Content-Type": "application/json"}
        self.timeout = timeout_sec
        self._transport = transport

    async def send(self, payload: AlertPayload) -> None:
        body = build_discord_message(payload, self.role)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(self.url, headers=self.headers, json=body)
        except httpx.HTTPError as e:
            raise DeliveryFailure(f"discord webhook unreachable: {e}") from e
        if not resp.is_success:
            raise DeliveryFailure(f"discord webhook answered {resp.status_code}: {resp.text[:200]}")
        logger.info("discord alert sent for actor %s", payload.actor_id)


def build_sinks(settings) -> List[AlertSink]:
    sinks: List[AlertSink] = []
    for name in settings.sinks():
        if name == "stdout":
            sinks.append(StdoutSink())
        elif name == "file":
            sinks.append(FileSink(settings.ALERT_FILE_PATH))
        elif name == "discord":
            if not settings.DISCORD_WEBHOOK_URL:
                logger.warning("discord sink requested but DISCORD_WEBHOOK_URL is empty, skipping")
                continue
            sinks.append(DiscordWebhookSink(
                settings.DISCORD_WEBHOOK_URL,
                role=settings.DISCORD_ROLE,
                timeout_sec=settings.ALERT_TIMEOUT_SEC,
            ))
        else:
            logger.warning("unknown alert sink %r ignored", name)
    return sinks
