from __future__ import annotations
from dataclasses import dataclass, asdict, field
from collections import deque
from typing import Dict, Any, List, Protocol, Optional
import time, asyncio, logging, socket, os

from hitmon.anomaly.models import AlertDecision
from hitmon.anomaly.zones import ZONE_ORDER
from hitmon.metrics import ALERTS_EMITTED, ALERT_DELIVERY_FAILURES

logger = logging.getLogger(__name__)


class DeliveryFailure(Exception):
    """A sink could not hand the alert to its outbound channel."""


@dataclass
class AlertPayload:
    ts: float
    kind: str
    actor_id: str
    subject_name: str
    title: str
    profile_url: str = ""
    threshold_zones: List[str] = field(default_factory=list)
    outlier_zones: List[str] = field(default_factory=list)
    short_term_stats: Dict[str, float] = field(default_factory=dict)
    long_term_stats: Dict[str, float] = field(default_factory=dict)
    short_term_medians: Dict[str, float] = field(default_factory=dict)
    long_term_medians: Dict[str, float] = field(default_factory=dict)
    short_term_count: int = 0
    long_term_count: int = 0
    host: str = socket.gethostname()
    env: str = os.getenv("APP_ENV", "dev")

    @property
    def flagged_zones(self) -> List[str]:
        flagged = set(self.threshold_zones) | set(self.outlier_zones)
        return [z.value for z in ZONE_ORDER if z.value in flagged]


class AlertSink(Protocol):
    async def send(self, payload: AlertPayload) -> None: ...


class AlertManager:
    """
    Fans an alert out to every registered sink in parallel.
    A failing sink is logged and counted; the others still get the alert.
    The last `keep_recent` payloads are kept in memory for /_debug/alerts.
    """
    def __init__(self, keep_recent: int = 0):
        self.sinks: List[AlertSink] = []
        self._recent = deque(maxlen=int(keep_recent)) if keep_recent > 0 else None

    def register(self, sink: AlertSink) -> None:
        self.sinks.append(sink)

    async def emit(self, payload: AlertPayload) -> List[str]:
        """Returns the names of the sinks that failed."""
        results = await asyncio.gather(*(self._send_one(s, payload) for s in self.sinks), return_exceptions=True)
        if self._recent is not None:
            self._recent.append(asdict(payload))
        return [name for name in results if isinstance(name, str)]

    async def _send_one(self, sink: AlertSink, payload: AlertPayload) -> Optional[str]:
        name = sink.__class__.__name__
        try:
            await sink.send(payload)
        except DeliveryFailure as e:
            logger.error("alert delivery via %s failed: %s", name, e)
            ALERT_DELIVERY_FAILURES.labels(sink=name).inc()
            return name
        except Exception:
            # beklenmeyen sink hatası diğer sink'leri ve HTTP cevabını etkilemez
            logger.exception("alert sink %s raised unexpectedly", name)
            ALERT_DELIVERY_FAILURES.labels(sink=name).inc()
            return name
        ALERTS_EMITTED.labels(sink=name).inc()
        return None

    def recent(self, limit: int | None = None) -> List[Dict[str, Any]]:
        if self._recent is None:
            return []
        if not limit or limit <= 0:
            return list(self._recent)
        return list(self._recent)[-int(limit):]


def _by_value(stats) -> Dict[str, float]:
    return {getattr(z, "value", z): float(v) for z, v in stats.items()}


def make_payload(decision: AlertDecision, profile_url: str = "") -> AlertPayload:
    return AlertPayload(
        ts=time.time(),
        kind="hit_zone",
        actor_id=decision.actor_id,
        subject_name=decision.subject_name,
        title=decision.title,
        profile_url=profile_url,
        threshold_zones=[z.value for z in ZONE_ORDER if z in decision.threshold_zones],
        outlier_zones=[z.value for z in ZONE_ORDER if z in decision.outlier_zones],
        short_term_stats=_by_value(decision.short_term_stats),
        long_term_stats=_by_value(decision.long_term_stats),
        short_term_medians=_by_value(decision.short_term_medians),
        long_term_medians=_by_value(decision.long_term_medians),
        short_term_count=decision.short_term_count,
        long_term_count=decision.long_term_count,
    )
