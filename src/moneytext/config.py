from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent / ".env"),
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./moneytext.db"
    db_echo: bool = False

    # Extraction bounds (local currency units)
    min_amount: Decimal = Decimal("1")
    max_amount: Decimal = Decimal("100000000")
    raw_text_max_length: int = 500
    merchant_max_length: int = 30
    reference_max_length: int = 20
    statement_description_max_length: int = 200

    # Batching / uploads
    email_max_batch: int = 50
    statement_max_size_mb: int = 25

    # Deduplication
    dedup_granularity_minutes: int = 60

    # Statement dates carry no timezone; interpret them in this zone.
    timezone: str = "Asia/Kolkata"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
