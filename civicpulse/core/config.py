"""
CivicPulse Core Settings.

Every option can be overridden from the environment (``CIVICPULSE_`` prefix)
or a local ``.env`` file. Persona engine options default to the values the
classification rules were tuned with.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8",
        env_prefix="CIVICPULSE_", case_sensitive=False,
    )

    # ── App ──────────────────────────────────────────────────────────────
    app_name: str = "CivicPulse"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"

    # ── PostgreSQL ───────────────────────────────────────────────────────
    db_host: str = "postgres"
    db_port: int = 5432
    db_user: str = "civicpulse"
    db_password: str = "civicpulse_secret"
    db_name: str = "civicpulse"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    # ── Redis / Celery ───────────────────────────────────────────────────
    celery_broker_url: str = "redis://redis:6379/1"
    celery_result_backend: str = "redis://redis:6379/2"

    # ── Persona Engine ───────────────────────────────────────────────────
    persona_min_posts_for_classification: int = 3
    persona_min_posts_for_trend: int = 5
    persona_trend_stability_band: float = 0.1
    persona_influence_cap: float = 100.0
    persona_top_influencers_per_region: int = 5
    persona_max_topics_per_profile: int = 5
    persona_tone_shift_high_influence: float = 70.0
    persona_influence_surge_threshold: float = 80.0
    persona_engagement_weight: float = 0.1

    # Event window pulled from sentiment_logs on every pass
    persona_batch_limit: int = 500
    persona_refresh_interval_seconds: float = 60.0
    # Refresh inside the API process; disable when a Celery beat worker runs
    persona_in_process_refresh: bool = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()
