"""Algebra settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AlgebraSettings(BaseSettings):
    """Tuning knobs for normalization and nominal subtyping."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TYPEALGEBRA_",
        case_sensitive=False,
        extra="ignore",
    )

    max_normalization_steps: int = Field(default=256, ge=1)
    transitive_subtyping: bool = Field(default=True)


def load_settings(**overrides: Any) -> AlgebraSettings:
    """Load settings from the environment, with optional explicit overrides."""
    return AlgebraSettings(**overrides)
