"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app, db, logging, pagination), each frozen and
loaded from its own environment prefix.

Import settings via cached loaders:
    from community_service.core.settings import get_pagination_settings

Or use unified settings for convenient access to all domains:
    from community_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .unified import Settings, get_settings

__all__ = [
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
    "get_settings",
]
