"""
Library-wide configuration using Pydantic Settings.

LibrarySettings holds the lowest-precedence layer of the settings fold: the
overrides shared by every resource registered through one CrudRouter. Values
are loaded from environment variables prefixed with ``CRUD_ROUTER_`` or
passed explicitly.

Architecture:
- Flat Settings structure (no nesting)
- Immutable once built (frozen model); captured by CrudRouter at construction
- Process-wide default via get_settings() (cached)

Usage:
    from crud_router.core.config import LibrarySettings, get_settings

    # Environment-driven defaults
    overrides = get_settings()

    # Explicit overrides
    overrides = LibrarySettings(private_context="/private", show_key=True)
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from crud_router.core.enums import Environment


class LibrarySettings(BaseSettings):
    """
    Library-wide override settings (flat structure).

    Configuration precedence:
        1. Explicit constructor arguments
        2. Environment variables (CRUD_ROUTER_*)
        3. Default values
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # URL generation
    host: str = Field(
        default="",
        description="Public base URL used in pagination Link headers "
        "(e.g., https://api.example.com). Empty uses the request URL.",
    )
    public_context: str | list[str] = Field(
        default="",
        description="Path prefix(es) for read operations (list, get)",
    )
    private_context: str | list[str] = Field(
        default="",
        description="Path prefix(es) for mutating operations",
    )

    # Output shaping defaults
    show_key: bool = Field(
        default=False,
        description="Include the storage identifier in entity projections",
    )
    read_all: bool = Field(
        default=False,
        description="Include fields normally hidden from output",
    )

    model_config = SettingsConfigDict(
        env_prefix="CRUD_ROUTER_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is a standard logging level name.

        Args:
            v: Log level name (any case).

        Returns:
            str: Upper-cased log level.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("host")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slashes so paths can be appended directly."""
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT


@lru_cache
def get_settings() -> LibrarySettings:
    """
    Get cached library settings instance.

    Returns:
        LibrarySettings: Process-wide default overrides (loaded once).
    """
    return LibrarySettings()
