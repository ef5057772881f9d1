from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Storefront Catalog Service"
    ENVIRONMENT: str = "local"
    CORS_ORIGINS: Optional[str] = None

    # ==============================
    # Database
    # ==============================
    DATABASE_URL: str = "sqlite:///./storefront.db"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Pricing
    # ==============================
    CURRENCY: str = "XOF"
    PRICE_DECIMAL_PLACES: int = 2

    # ==============================
    # Admin dashboard
    # ==============================
    LOW_STOCK_THRESHOLD: int = 10
    LOW_STOCK_LIMIT: int = 5
    RECENT_ORDERS_LIMIT: int = 5

    # ==============================
    # Likes
    # ==============================
    LIKES_STORE_PATH: str = "liked_products.json"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
