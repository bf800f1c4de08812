from .base import AlertPayload, AlertSink, AlertManager, DeliveryFailure, make_payload
from .sinks import StdoutSink, FileSink, DiscordWebhookSink, build_sinks

__all__ = [
    "AlertPayload",
    "AlertSink",
    "AlertManager",
    "DeliveryFailure",
    "make_payload",
    "StdoutSink",
    "FileSink",
    "DiscordWebhookSink",
    "build_sinks",
]
