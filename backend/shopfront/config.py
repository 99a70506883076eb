"""
shopfront/config.py - Application configuration.

This module defines a Pydantic BaseSettings class to load configuration from environment
(and an optional `.env` file). All other modules import `settings` from here, or use
`get_settings()` when they want the value injected.
"""
import logging
from typing import Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_NTH_ORDER = 3


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""
    nth_order_discount: int = Field(DEFAULT_NTH_ORDER, description="Every Nth order unlocks a discount code")

    host: str = "0.0.0.0"
    port: int = 8080

    debug: bool = False
    log_level: str = "INFO"
    allowed_origins: str = Field('*', description="Comma-separated list or '*' for all")
    static_dir: str = "static"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @field_validator("nth_order_discount", mode="before")
    @classmethod
    def _positive_threshold(cls, v: Any) -> int:
        # Garbage or non-positive values are ignored, same as an unset variable.
        try:
            n = int(str(v).strip())
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid NTH_ORDER_DISCOUNT=%r", v)
            return DEFAULT_NTH_ORDER
        if n <= 0:
            logger.warning("Ignoring non-positive NTH_ORDER_DISCOUNT=%r", v)
            return DEFAULT_NTH_ORDER
        return n

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @property
    def origins(self) -> List[str]:
        """CORS origins as a list."""
        if not self.allowed_origins:
            return ["*"]
        return [origin.strip() for origin in self.allowed_origins.split(',') if origin.strip()]


# Load settings from environment (.env file, etc.)
settings = Settings()


def get_settings() -> Settings:
    return settings
