from __future__ import annotations
import hashlib
import hmac

SIGNATURE_HEADER = "x-hephaistos-signature"
DELIVERY_HEADER = "x-hephaistos-delivery"
EVENT_HEADER = "x-hephaistos-event"

VERIFICATION_EVENT = "verification"


def expected_signature(delivery_id: str, secret: str) -> str:
    """sha256 hex of delivery id + shared secret, as the sender computes it."""
    return hashlib.sha256(f"{delivery_id}{secret}".encode("utf-8")).hexdigest()


def verify_signature(delivery_id: str | None, signature: str | None, secret: str) -> bool:
    if not delivery_id or not signature:
        return False
    return hmac.compare_digest(expected_signature(delivery_id, secret), signature.strip().lower())
