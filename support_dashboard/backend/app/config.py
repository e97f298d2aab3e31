# support_dashboard/backend/app/config.py
import logging
from datetime import tzinfo
from logging.config import dictConfig
from typing import Literal, Optional
from zoneinfo import ZoneInfo

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class Settings(BaseSettings):
    """Runtime configuration read from the environment / .env."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    ticket_store: Literal["sql", "http"] = "sql"
    ticket_store_url: Optional[AnyHttpUrl] = None
    ticket_store_api_key: Optional[str] = None
    ticket_store_timeout: float = Field(default=10.0, gt=0)

    dashboard_timezone: Optional[str] = None

    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT

    def resolved_today_tz(self) -> Optional[tzinfo]:
        """
        Time zone used for the "resolved today" calendar day.
        None means the local time zone of the clock.
        """
        name = (self.dashboard_timezone or "").strip()
        if not name or name.lower() == "local":
            return None
        return ZoneInfo(name)


def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": settings.log_format}},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                }
            },
            "loggers": {
                "support_dashboard": {
                    "handlers": ["default"],
                    "level": level,
                    "propagate": False,
                }
            },
        }
    )
