# salestracker/core/config.py
"""Application settings read from the environment."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration."""

    database_url: str = "sqlite:///./salestracker.db"
    default_page_size: int = 50
    max_page_size: int = 1000
    retry_attempts: int = 3
    retry_delay: float = 0.5  # seconds
    retry_backoff: float = 2.0
    application_id: str = "Unknown"
    request_log_enabled: bool = True
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            default_page_size=int(os.getenv("DEFAULT_PAGE_SIZE", cls.default_page_size)),
            max_page_size=int(os.getenv("MAX_PAGE_SIZE", cls.max_page_size)),
            retry_attempts=int(os.getenv("RETRY_ATTEMPTS", cls.retry_attempts)),
            retry_delay=float(os.getenv("RETRY_DELAY", cls.retry_delay)),
            retry_backoff=float(os.getenv("RETRY_BACKOFF", cls.retry_backoff)),
            application_id=os.getenv("APPLICATION_ID", cls.application_id),
            request_log_enabled=_env_bool("REQUEST_LOG_ENABLED", cls.request_log_enabled),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
        )


settings = Settings.from_env()
