from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from burrow.domain.entries import DEFAULT_SORT, normalize_sort_key


class RuntimeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BURROW_", case_sensitive=False)

    log_level: str = "info"
    log_format: str = "json"
    log_dir: Path | None = None
    default_sort: str = DEFAULT_SORT
    gateway_timeout: float = Field(default=10.0, gt=0)
    history_limit: int = Field(default=200, ge=1)
    suggestion_limit: int = Field(default=50, ge=1)
    size_depth: int = Field(default=3, ge=0)

    @field_validator("default_sort")
    @classmethod
    def _normalize_sort(cls, value: str) -> str:
        return normalize_sort_key(value)


@lru_cache
def get_runtime_config() -> RuntimeConfig:
    return RuntimeConfig()
