"""Environment-based configuration using pydantic-settings.

Every knob has a default that matches the library's documented behavior, so
nothing needs configuring for ordinary use.

Example:
    >>> from errchain.config import get_settings
    >>> settings = get_settings()
    >>> settings.stack.enabled
    True
    >>> settings.chain.max_depth
    10000

    # Or with environment variables:
    # ERRCHAIN_STACK_ENABLED=false
    # ERRCHAIN_STACK_MAX_DEPTH=32
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, PositiveInt, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("errchain.config")


class StackSettings(BaseSettings):
    """Stack capture configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ERRCHAIN_STACK_",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Capture call stacks in new/errorf/with_stack")
    max_depth: PositiveInt | None = Field(default=None, description="Max frames per capture (None = unbounded)")


class ChainSettings(BaseSettings):
    """Chain walking configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ERRCHAIN_CHAIN_",
        extra="ignore",
    )

    max_depth: PositiveInt = Field(default=10_000, description="Max links visited by a single walk")


class ErrchainSettings(BaseSettings):
    """Root settings for errchain.

    Loads configuration from environment variables with ERRCHAIN_ prefix.

    Example environment variables:
        ERRCHAIN_DEBUG=true
        ERRCHAIN_STACK_ENABLED=false
        ERRCHAIN_STACK_MAX_DEPTH=32
        ERRCHAIN_CHAIN_MAX_DEPTH=500
    """

    model_config = SettingsConfigDict(
        env_prefix="ERRCHAIN_",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Log silent degradations at WARNING instead of DEBUG")

    # Nested settings (loaded with ERRCHAIN_STACK_, ERRCHAIN_CHAIN_)
    stack: StackSettings = Field(default_factory=StackSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)


@lru_cache(maxsize=1)
def get_settings() -> ErrchainSettings:
    """Get the global settings instance (cached).

    Raises pydantic ValidationError when the environment holds invalid values.

    Example:
        >>> get_settings().stack.enabled
        True
    """
    return ErrchainSettings()


@lru_cache(maxsize=1)
def effective_settings() -> ErrchainSettings:
    """Settings used by the library itself: invalid environment falls back to defaults.

    Constructors and rendering must not raise, so a bad ERRCHAIN_* value is
    reported once at WARNING and every field takes its default.
    """
    try:
        return get_settings()
    except ValidationError as e:
        logger.warning(f"Invalid errchain settings in environment, using defaults: {e}")
        return ErrchainSettings.model_construct(
            stack=StackSettings.model_construct(),
            chain=ChainSettings.model_construct(),
        )


def degradation_level() -> int:
    """Log level for silent degradations (WARNING when ERRCHAIN_DEBUG is set)."""
    return logging.WARNING if effective_settings().debug else logging.DEBUG


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
    effective_settings.cache_clear()
