from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

from hitmon.anomaly.models import EngineConfig, ThresholdSpec
from hitmon.anomaly.zones import Zone


def _default_short_term() -> List[ThresholdSpec]:
    return [ThresholdSpec(Zone.HEAD, 60.0), ThresholdSpec(Zone.BRAIN, 40.0)]


def _default_long_term() -> List[ThresholdSpec]:
    return [ThresholdSpec(Zone.HEAD, 45.0), ThresholdSpec(Zone.BRAIN, 30.0)]


class Settings(BaseSettings):
    APP_ENV: str = "dev"
    APP_VERSION: str = "0.1.0"
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    LOGS_DIR: str = "./logs"
    WEBHOOK_SECRET: str = ""

    SHORT_TERM_LOG_ENTRIES: int = Field(20, ge=1)
    MIN_SHORT_TERM_LOG_ENTRIES: int = Field(10, ge=0)
    MIN_DISTANCE: float = 0.0
    # env'de JSON liste: [{"zone": "head", "value": 60}]
    SHORT_TERM_THRESHOLDS: List[ThresholdSpec] = Field(default_factory=_default_short_term)
    LONG_TERM_THRESHOLDS: List[ThresholdSpec] = Field(default_factory=_default_long_term)

    ALERT_SINKS: str = "stdout"
    ALERT_FILE_PATH: str = "./alerts.log"
    ALERT_KEEP_RECENT: int = 200
    ALERT_TIMEOUT_SEC: float = 5.0
    DISCORD_WEBHOOK_URL: str = ""
    DISCORD_ROLE: str = ""
    PROFILE_URL_TEMPLATE: str = "https://app.cftools.cloud/profile/{actor_id}"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"

    def sinks(self) -> List[str]:
        return [s.strip().lower() for s in self.ALERT_SINKS.split(",") if s.strip()]

    def engine_config(self) -> EngineConfig:
        return EngineConfig(
            short_term_size=self.SHORT_TERM_LOG_ENTRIES,
            min_short_term_entries=self.MIN_SHORT_TERM_LOG_ENTRIES,
            min_distance=self.MIN_DISTANCE,
            short_term_thresholds=self.SHORT_TERM_THRESHOLDS,
            long_term_thresholds=self.LONG_TERM_THRESHOLDS,
        )


def get_settings() -> Settings:
    return Settings()
