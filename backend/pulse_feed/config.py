from __future__ import annotations
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    frontend_url: str = "http://localhost:3000"
    extra_cors_origins: str = ""  # comma-separated additional origins for production

    # Feed settings
    tokens_per_category: int = 10
    tokens_page_size: int = 20
    random_seed: Optional[int] = None  # fixed seed for reproducible feeds

    # Worker settings
    tick_enabled: bool = True  # kill switch
    tick_interval_seconds: float = 1.5
    stream_interval_seconds: float = 1.5

    # Client query cache policy, published to the frontend
    query_stale_time_seconds: int = 30
    query_gc_time_seconds: int = 300  # 5 minutes
    query_retry_count: int = 2
    query_refetch_on_window_focus: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
