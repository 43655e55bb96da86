"""
Core Package

Centralized configuration, logging and error handling for the clinic
scheduling service.

Modules:
- config: Environment configuration and settings
- logging: Structured logging with trace_id support
- errors: Standardized error classes and HTTP conversion

Usage:
    from clinic_service.core import settings, setup_logging, set_trace_id
    from clinic_service.core import ValidationError, NotFoundError
"""

# Configuration
from clinic_service.core.config import settings, get_settings, is_production, is_development

# Logging
from clinic_service.core.logging import (
    setup_logging,
    set_trace_id,
    get_trace_id,
    get_logger
)

# Errors
from clinic_service.core.errors import (
    AppError,
    ValidationError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    InternalError,
    error_payload,
    from_http_exception,
    to_http_exception
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    "is_production",
    "is_development",

    # Logging
    "setup_logging",
    "set_trace_id",
    "get_trace_id",
    "get_logger",

    # Errors
    "AppError",
    "ValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ServiceUnavailableError",
    "InternalError",
    "error_payload",
    "from_http_exception",
    "to_http_exception",
]
