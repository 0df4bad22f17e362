from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Procurement Exchange"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"
    default_page_limit: int = 200
    max_page_limit: int = 2000

    # ─────────── DATABASE ───────────
    database_url: str
    database_echo: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
