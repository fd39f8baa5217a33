from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised application settings, sourced from environment variables or .env."""

    app_name: str = Field(default="Lavon Sales", alias="APP_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    api_base_url: AnyHttpUrl = Field(
        default="http://localhost:8000/api",
        alias="LAVON_API_BASE_URL",
        description="Base URL of the remote sales API that owns sale, customer and user records.",
    )
    api_timeout_seconds: float = Field(default=30.0, alias="LAVON_API_TIMEOUT_SECONDS", gt=0)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["standard", "json"] = Field(default="standard", alias="LOG_FORMAT")
    kpr_booking_fee: float = Field(
        default=10_000_000,
        alias="KPR_BOOKING_FEE",
        description="Fixed booking fee collected upfront on KPR (mortgage) sales.",
        ge=0,
    )
    kpr_down_payment_ratio: float = Field(
        default=0.10,
        alias="KPR_DOWN_PAYMENT_RATIO",
        description="Share of the unit price paid as down payment on KPR sales.",
        ge=0,
        le=1,
    )
    due_soon_days: int = Field(
        default=7,
        alias="DUE_SOON_DAYS",
        description="Lookahead window (in days) for flagging an installment as due soon.",
        ge=0,
    )
    commission_rate: float = Field(
        default=0.012,
        alias="COMMISSION_RATE",
        description="Commission paid to marketers as a fraction of monthly sales value.",
        ge=0,
        le=1,
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", populate_by_name=True
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor so imports share a single settings instance."""
    return Settings()
