from __future__ import annotations
from enum import Enum


class Zone(str, Enum):
    HEAD = "head"
    BRAIN = "brain"
    TORSO = "torso"
    OTHERS = "others"


# rapor tablosundaki sabit satır sırası
ZONE_ORDER = (Zone.HEAD, Zone.BRAIN, Zone.TORSO, Zone.OTHERS)

_NAMED = {Zone.HEAD.value: Zone.HEAD, Zone.BRAIN.value: Zone.BRAIN, Zone.TORSO.value: Zone.TORSO}


def classify(raw_zone) -> Zone:
    """Map a raw hit zone label onto Zone; anything unknown lands in OTHERS."""
    if isinstance(raw_zone, Zone):
        return raw_zone
    return _NAMED.get(raw_zone, Zone.OTHERS) if isinstance(raw_zone, str) else Zone.OTHERS
