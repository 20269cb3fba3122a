"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database (search cache). Empty means "not configured".
    database_url: str = ""

    # App
    debug: bool = False
    log_level: str = "INFO"

    # --- Search aggregation ---
    search_cache_ttl_hours: int = 24
    search_provider_timeout_seconds: float = 8.0
    search_max_results_per_source: int = 8
    search_user_agent: str = "RepairGuideApp/1.0 (Educational Purpose)"
    search_accept: str = "application/json"

    # --- Providers ---
    guide_api_base: str = "https://www.ifixit.com/api/2.0"
    guide_site_base: str = "https://www.ifixit.com"
    forum_base: str = "https://www.reddit.com"
    forum_subreddit: str = "ifixit"
    video_base: str = "https://www.youtube.com"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
