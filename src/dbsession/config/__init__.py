"""
Configuration Module
====================

Application settings and configuration management using Pydantic.

Settings are read-only once loaded. Nested values are addressable by
slash-separated paths, e.g. ``settings.get("general/database/charset")``.
"""

from functools import lru_cache
from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigReader(Protocol):
    """Read-only key/value view over application configuration."""

    def get(self, path: str, default: Any = None) -> Any:
        ...


class DatabaseSettings(BaseModel):
    """Database connection and session settings."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        default="postgresql+asyncpg://localhost:5432/app",
        description="Database connection URL (async driver)"
    )
    charset: Optional[str] = Field(
        default="utf8mb4",
        description="Session character set (MySQL family)"
    )
    collate: Optional[str] = Field(
        default="utf8mb4_unicode_ci",
        description="Session collation (MySQL family)"
    )
    pool_size: int = Field(default=5, description="Connection pool size", ge=1)
    max_overflow: int = Field(default=10, description="Max overflow connections", ge=0)
    echo: bool = Field(default=False, description="Log emitted SQL")


class GeneralSettings(BaseModel):
    """The ``general`` configuration section."""

    model_config = ConfigDict(frozen=True)

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Nested sections use ``__`` as the delimiter, so the session charset
    is set with ``GENERAL__DATABASE__CHARSET``.
    """

    # ========== Application ==========
    app_name: str = Field(default="dbal-session", description="Application name")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Sections ==========
    general: GeneralSettings = Field(default_factory=GeneralSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    def get(self, path: str, default: Any = None) -> Any:
        """
        Look up a value by slash-separated path.

        Args:
            path: Path such as ``general/database/collate``
            default: Returned when any segment is missing

        Returns:
            The stored value, or ``default``
        """
        node: Any = self
        for part in path.strip("/").split("/"):
            if isinstance(node, BaseModel):
                if part not in type(node).model_fields:
                    return default
                node = getattr(node, part)
            elif isinstance(node, dict):
                if part not in node:
                    return default
                node = node[part]
            else:
                return default
        return node


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()
