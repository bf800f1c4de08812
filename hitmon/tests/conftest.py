# hitmon/tests/conftest.py
import sys, pathlib
from dotenv import load_dotenv

# Proje kökünü sys.path'e ekle (hitmon/tests -> hitmon -> KÖK: parents[2])
ROOT = pathlib.Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

load_dotenv()

import pytest

from hitmon.anomaly import Event


@pytest.fixture
def make_events():
    def _make(*pairs, actor_id="abc123", name="Survivor"):
        # pairs: (zone, distance)
        return [Event(zone=z, distance=float(d), actor_id=actor_id, subject_name=name) for z, d in pairs]
    return _make
