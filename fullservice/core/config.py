from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# project root (the folder holding pyproject.toml)
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    app_name: str = "Online Full Service"
    app_env: str = "dev"

    # token signing / store endpoint: no in-source fallbacks
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    database_url: str

    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


class ClientSettings(BaseSettings):
    api_base_url: str = "http://localhost:8000"

    # durable local key/value state (session snapshot, language, blobs)
    state_path: Path = BASE_DIR / ".fullservice" / "state.json"

    ip_lookup_url: str = "https://api.ipify.org?format=json"
    ip_lookup_timeout: float = 5.0
    location_timeout: float = 10.0
    gps_check_timeout: float = 5.0

    search_debounce_seconds: float = 0.3
    default_language: str = "en"

    model_config = SettingsConfigDict(
        env_prefix="CLIENT_",
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
