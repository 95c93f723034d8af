"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # OpenDota
    opendota_base_url: str = "https://api.opendota.com/api"
    opendota_api_key: str = ""
    opendota_timeout: float = 15.0
    use_mock_opendota: bool = False
    recent_matches_limit: int = 50

    # Mastery score weights (tuning, not architecture)
    mastery_games_weight: float = 40.0
    mastery_games_cap: int = 100
    mastery_winrate_weight: float = 0.8
    mastery_winrate_baseline: float = 50.0
    mastery_kda_weight: float = 10.0
    mastery_kda_baseline: float = 2.0
    mastery_kda_cap: float = 6.0

    # Streaks and sessions
    streak_lookback: int = 10
    momentum_min_streak: int = 2
    session_mmr_delta: int = 25
    min_hero_games: int = 1

    # Diagnostics
    summary_diagnostics: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
