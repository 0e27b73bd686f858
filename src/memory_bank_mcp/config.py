"""Configuration management for Memory Bank MCP."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MemoryBankSettings(BaseSettings):
    """Runtime configuration sourced from environment variables and optional .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    project_path: Path | None = Field(default=None, validation_alias="PROJECT_PATH")
    memory_bank_dirname: str = Field(default="memory-bank", validation_alias="MEMORY_BANK_DIRNAME")
    log_level: str = Field(default="INFO", validation_alias="MEMORY_BANK_LOG_LEVEL")
    progress_flush_threshold: int = Field(
        default=10, validation_alias="MEMORY_BANK_PROGRESS_FLUSH_THRESHOLD"
    )
    mcp_settings_path: Path | None = Field(default=None, validation_alias="MEMORY_BANK_MCP_SETTINGS")
    server_name: str = Field(default="memory-bank", validation_alias="MEMORY_BANK_SERVER_NAME")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(
                "MEMORY_BANK_LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG"
            )
        return normalized

    @field_validator("project_path", "mcp_settings_path", mode="before")
    @classmethod
    def _empty_path_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("memory_bank_dirname")
    @classmethod
    def _validate_dirname(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized or "/" in normalized or "\\" in normalized:
            raise ValueError("MEMORY_BANK_DIRNAME must be a single directory name")
        return normalized

    @field_validator("progress_flush_threshold")
    @classmethod
    def _validate_flush_threshold(cls, value: int) -> int:
        if value < 1:
            raise ValueError("MEMORY_BANK_PROGRESS_FLUSH_THRESHOLD must be >= 1")
        return value


@lru_cache(maxsize=1)
def get_settings() -> MemoryBankSettings:
    """Return cached settings instance."""

    settings = MemoryBankSettings()
    if settings.project_path is not None:
        settings.project_path = settings.project_path.expanduser().resolve()
    if settings.mcp_settings_path is not None:
        settings.mcp_settings_path = settings.mcp_settings_path.expanduser().resolve()
    return settings


__all__ = ["MemoryBankSettings", "get_settings"]
