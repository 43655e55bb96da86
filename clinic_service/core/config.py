"""
Core Configuration Module

Centralizes environment configuration for the clinic scheduling service.
Provides a singleton Settings object with defaults for local development.

Usage:
    from clinic_service.core.config import settings

    print(settings.APP_ENV)
    print(settings.CLINIC_STORE_URL)
"""

import os
from typing import List, Optional


class Settings:
    """
    Application settings loaded from environment variables.

    Values are read on every access so tests can monkeypatch the
    environment without rebuilding the singleton.
    """

    # ==================== Application Settings ====================

    @property
    def APP_ENV(self) -> str:
        """Application environment: dev, staging, production"""
        return os.getenv("APP_ENV", "dev")

    @property
    def LOG_LEVEL(self) -> str:
        """Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"""
        return os.getenv("LOG_LEVEL", "INFO")

    # ==================== Clinic Data Store ====================

    @property
    def CLINIC_STORE_URL(self) -> str:
        """Base URL of the clinic data store (clients, staff, services, appointments)"""
        return os.getenv("CLINIC_STORE_URL", "http://localhost:8080")

    @property
    def STORE_CLIENT_TIMEOUT(self) -> float:
        """Store HTTP client timeout in seconds"""
        return float(os.getenv("STORE_CLIENT_TIMEOUT", "10.0"))

    @property
    def STORE_CLIENT_MAX_CONNECTIONS(self) -> int:
        """Maximum HTTP connections in the store client pool"""
        return int(os.getenv("STORE_CLIENT_MAX_CONNECTIONS", "50"))

    @property
    def STORE_CLIENT_MAX_KEEPALIVE(self) -> int:
        """Maximum keepalive connections in the store client pool"""
        return int(os.getenv("STORE_CLIENT_MAX_KEEPALIVE", "10"))

    # ==================== Scheduling ====================

    @property
    def CLINIC_TIMEZONE(self) -> str:
        """Timezone of availability windows; store instants are converted to it"""
        return os.getenv("CLINIC_TIMEZONE", "UTC")

    @property
    def SLOT_STEP_MINUTES(self) -> int:
        """Granularity between candidate appointment start times"""
        return int(os.getenv("SLOT_STEP_MINUTES", "15"))

    # ==================== CORS Settings ====================

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Allowed CORS origins"""
        origins_str = os.getenv("CORS_ORIGINS", "*")
        if origins_str == "*":
            return ["*"]
        return [origin.strip() for origin in origins_str.split(",")]

    @property
    def CORS_ALLOW_CREDENTIALS(self) -> bool:
        """Allow credentials in CORS requests"""
        return os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() == "true"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


settings = get_settings()


def is_production() -> bool:
    """APP_ENV is "production" or "prod"."""
    return settings.APP_ENV.lower() in ("production", "prod")


def is_development() -> bool:
    """APP_ENV is "dev" or "development" (the default)."""
    return settings.APP_ENV.lower() in ("dev", "development")
