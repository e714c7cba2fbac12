"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    ChainSettings,
    ErrchainSettings,
    StackSettings,
    clear_settings_cache,
    degradation_level,
    effective_settings,
    get_settings,
)

__all__ = [
    "ChainSettings",
    "ErrchainSettings",
    "StackSettings",
    "clear_settings_cache",
    "degradation_level",
    "effective_settings",
    "get_settings",
]
