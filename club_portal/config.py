"""Application configuration"""

import logging
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    app_name: str = "Club Portal API"
    debug: bool = False
    cors_origins: List[str] = ["http://localhost:3000"]

    # Database
    database_path: str = "./data/portal.json"

    # Security
    portal_secret_key: str = "dev-secret-change-me"
    access_token_expire_minutes: int = 60 * 24  # 24 hours
    # Login failures say "no such user" / "wrong password" instead of one generic message
    reveal_login_failure_reason: bool = False

    # Client polling (seconds)
    dashboard_refresh_seconds: int = 30
    admin_refresh_seconds: int = 5

    # Dashboard
    upcoming_sessions_limit: int = 5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


def validate_production_settings(settings: Settings) -> list:
    """Validate that all required settings are configured for production"""
    errors = []

    if settings.portal_secret_key == "dev-secret-change-me":
        errors.append("PORTAL_SECRET_KEY must be changed from default value")

    if settings.reveal_login_failure_reason:
        errors.append("REVEAL_LOGIN_FAILURE_REASON discloses which usernames exist")

    if settings.dashboard_refresh_seconds < 5:
        errors.append("DASHBOARD_REFRESH_SECONDS below 5 will hammer the document store")

    return errors


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    base_settings = Settings()

    if not base_settings.debug:
        for error in validate_production_settings(base_settings):
            logger.warning(f"Production config warning: {error}")

    return base_settings
