"""Application configuration management using Pydantic Settings."""
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory where config.py is located
BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = "Rental Storefront"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern="^(development|staging|production)$")

    # Pricing
    tax_rate: float = Field(default=0.0725, ge=0, description="Sales tax applied to the subtotal")
    base_shipping_fee: float = Field(default=9.99, ge=0, description="Flat shipping fee per order")
    delivery_estimate_days: int = Field(default=7, ge=0)

    # Local storage
    local_storage_path: Path = BASE_DIR.parent / ".storefront" / "local_storage.json"
    bag_storage_key: str = "bagItems"
    promo_storage_key: str = "appliedPromo"
    wishlist_storage_key: str = "wishlistItems"

    # Checkout
    order_confirmation_path: str = "/order-confirmation"
    default_country: str = "United States"

    # MongoDB
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = "rental_storefront"
    mongodb_order_collection: str = "order"
    mongodb_order_item_collection: str = "order_item"
    mongodb_max_pool_size: int = 10
    mongodb_min_pool_size: int = 1
    mongodb_timeout_ms: int = 5000

    # Logging
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names from the environment."""
        if isinstance(v, str):
            return v.upper()
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
