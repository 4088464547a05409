# food_admin/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="FOOD_ADMIN_", extra="ignore")

    # 🌐 backend origin that serves /api/users, /api/orders, ...
    backend_url: str = Field(default="http://localhost:5000")
    # storefront used for "Track Order" links
    storefront_url: str = Field(default="http://localhost:3000")
    recent_orders_days: int = Field(default=7, ge=0)
    toast_auto_close_ms: int = Field(default=3000, ge=0)
    # the backend has no review endpoint yet
    total_reviews: int = Field(default=150)
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()
