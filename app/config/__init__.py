"""
Configuration package for the Saffa API.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    LogFormat,
    SecuritySettings,
    RateLimitSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "LogFormat",
    "SecuritySettings",
    "RateLimitSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
