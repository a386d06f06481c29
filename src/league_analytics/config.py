"""
Configuration module using pydantic-settings.

Loads analytics tuning parameters from environment variables with sensible defaults.
"""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Analytics settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LEAGUE_ANALYTICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"

    # Rivalry
    weeks_per_season: int = 17  # Used to approximate cross-season gaps
    closest_games_limit: int = 5

    # League pulse
    close_game_margin: float = 10.0
    blowout_margin: float = 40.0
    histogram_bucket_size: int = 10
    playoff_spots: int = 6
    clinch_games_ahead: int = 3
    elimination_games_back: int = 4

    # Trade grading
    trade_evaluation_weeks: int = 4
    keeper_rounds: int = 0  # Rounds used for keepers before tradeable rounds start
    pick_round_values: dict[int, float] = Field(
        default_factory=lambda: {1: 30.0, 2: 20.0, 3: 12.0, 4: 12.0, 5: 6.0, 6: 6.0}
    )
    default_pick_value: float = 3.0
    future_pick_discount: float = 0.8  # Multiplier per season out

    # Keepers
    keeper_top_performers: int = 2


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Install a basic root handler at the configured level."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
