"""Text summarizer configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = "development"

    # Server
    host: str = "127.0.0.1"
    port: int = 5050
    cors_origin: str = "http://localhost:5173"

    # Database
    database_url: str = "sqlite+aiosqlite:///./data.sqlite"

    # OpenAI
    openai_api_key: str = ""
    summarization_model: str = "gpt-4o-mini"

    # Rate limiting for /api/summarize
    rate_limit_max_requests: int = 10
    rate_limit_window_seconds: int = 60
    trusted_proxy_hops: int = 1  # X-Forwarded-For hops to trust, 0 to ignore the header

    # Repetition guard: a 1..max_unit character run followed by min_repeats copies
    repetition_max_unit: int = 20
    repetition_min_repeats: int = 10

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
