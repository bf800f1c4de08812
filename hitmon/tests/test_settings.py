import pytest
from pydantic import ValidationError

from hitmon.anomaly import ThresholdSpec, Zone
from hitmon.core.settings import Settings


def test_thresholds_parsed_from_json_env(monkeypatch):
    monkeypatch.setenv("SHORT_TERM_LOG_ENTRIES", "15")
    monkeypatch.setenv("SHORT_TERM_THRESHOLDS", '[{"zone": "head", "value": 55.5}, {"zone": "others", "value": 80}]')
    monkeypatch.setenv("LONG_TERM_THRESHOLDS", '[{"zone": "brain", "value": 20}]')
    cfg = Settings(_env_file=None).engine_config()
    assert cfg.short_term_size == 15
    assert cfg.short_term_thresholds == (ThresholdSpec(Zone.HEAD, 55.5), ThresholdSpec(Zone.OTHERS, 80.0))
    assert cfg.long_term_thresholds == (ThresholdSpec(Zone.BRAIN, 20.0),)


def test_unknown_threshold_zone_fails_at_load(monkeypatch):
    monkeypatch.setenv("SHORT_TERM_THRESHOLDS", '[{"zone": "legs", "value": 10}]')
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_window_size_must_be_positive(monkeypatch):
    monkeypatch.setenv("SHORT_TERM_LOG_ENTRIES", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_sink_list_parsing(monkeypatch):
    monkeypatch.setenv("ALERT_SINKS", " stdout, Discord ,,file")
    assert Settings(_env_file=None).sinks() == ["stdout", "discord", "file"]
