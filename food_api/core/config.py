"""
Food API — Configuration
All settings are read from environment variables (or .env file).
"""
import json
import logging
import sys
from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    SERVICE_NAME: str = "food-api"
    SERVICE_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # ── Firebase ─────────────────────────────────────────────
    FIREBASE_SERVICE_ACCOUNT: str = "{}"
    FIREBASE_WEB_API_KEY: str = ""
    IDENTITY_TOOLKIT_URL: str = "https://identitytoolkit.googleapis.com/v1"

    @property
    def service_account_info(self) -> dict[str, Any]:
        return json.loads(self.FIREBASE_SERVICE_ACCOUNT or "{}")

    @property
    def web_api_key(self) -> str:
        # Older deployments keep the key inside the service account JSON
        return self.FIREBASE_WEB_API_KEY or self.service_account_info.get("webApiKey", "")

    # ── Optimistic Locking Retry ──────────────────────────────
    OPT_LOCK_MAX_RETRIES: int = 5
    OPT_LOCK_BASE_DELAY_MS: int = 50      # base exponential backoff delay in ms
    OPT_LOCK_MAX_DELAY_MS: int = 1000     # max backoff cap in ms
    OPT_LOCK_JITTER_MS: int = 50          # random jitter range in ms

    # ── Client application ────────────────────────────────────
    STATIC_DIR: str = "public"
    CLIENT_DIST_DIR: str = "dist"

    # ── Outbound HTTP / Observability ─────────────────────────
    HTTP_TIMEOUT_SECONDS: float = 5.0
    HEALTH_CHECK_TIMEOUT: float = 5.0
    METRICS_ENABLED: bool = True


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def setup_logging() -> None:
    """Configure root logging once, at process start."""
    settings = get_settings()
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
