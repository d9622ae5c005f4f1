"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server configuration. Every field can be overridden with ONIGOKKO_<NAME>."""

    model_config = SettingsConfigDict(
        env_prefix='ONIGOKKO_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
    )

    # Database (None = SQLite file under data/ next to pyproject.toml)
    database_url: str | None = None

    # Game defaults, copied into a game's settings when it is created
    location_update_interval_s: int = 30
    location_accuracy_m: float = 50.0
    chaser_radar_range_m: float = 200.0
    capture_range_m: float = 50.0
    mission_radius_m: float = 100.0
    game_duration_s: int = 3600

    log_level: str = 'INFO'


settings = Settings()
