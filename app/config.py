"""Application configuration settings."""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "postgresql://localhost:5432/transactions"

    # Redis (Celery broker for out-of-process re-seeding)
    redis_url: str = "redis://localhost:6379/0"

    # Remote seed feed
    transactions_feed_url: str = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"
    feed_timeout_seconds: float = 30.0
    seed_on_startup: bool = True

    # Environment
    environment: str = "development"

    # Frontend origins allowed by CORS
    cors_origins: list[str] = ["*"]

    # Pagination
    default_per_page: int = 10
    max_per_page: int = 100

    # Re-seed scheduling (seconds); off unless explicitly enabled
    seed_interval_seconds: int = 86400  # 24 hours
    scheduler_enabled: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
