"""Runtime infrastructure for campusmeal.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Settings resolution via get_settings(), Settings
- The REST API client via CampusApiClient
- Receipt/report file output via save_document()

Usage:
    from campusmeal.runtime import get_logger, get_settings

    logger = get_logger(__name__)
    settings = get_settings()
    print(settings.api_url, settings.output_dir)
"""

from campusmeal.runtime.api_client import ApiError, ApiUnavailable, CampusApiClient
from campusmeal.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    set_log_level,
)
from campusmeal.runtime.receipt_storage import receipts_dir, reports_dir, save_document
from campusmeal.runtime.settings import (
    ConfigError,
    Settings,
    get_settings,
    load_settings,
    reset_settings,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "ConfigError",
    "Settings",
    "get_settings",
    "load_settings",
    "reset_settings",
    # API
    "ApiError",
    "ApiUnavailable",
    "CampusApiClient",
    # Storage
    "receipts_dir",
    "reports_dir",
    "save_document",
]
