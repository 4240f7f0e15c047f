from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: Optional[str] = None
    sql_echo: bool = False
    session_secret: str = "menudujour-dev-secret"  # 🔐 Override in production
    timezone: str = "Europe/Paris"
    log_level: str = "INFO"

    # PDF export (headless Chromium)
    chrome_path: Optional[str] = None
    pdf_timeout_seconds: float = 30.0

    # Categories rendered as the lead-in drinks section
    beverage_category_names: List[str] = ["boisson", "boissons"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
