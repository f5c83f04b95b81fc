from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Restaurant Ledger API"
    app_env: str = "local"
    app_debug: bool = True
    api_port: int = 8000
    database_url: str = "sqlite+pysqlite:///./ledger.db"
    jwt_secret: str = "replace-me"
    jwt_algorithm: str = "HS256"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    metrics_enabled: bool = False
    otel_enabled: bool = False
    otel_exporter_otlp_endpoint: str | None = None
    otel_console_exporter: bool = False
    ledger_reject_overlapping_periods: bool = False
    ledger_default_page_size: int = 100
    ledger_max_page_size: int = 200

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
