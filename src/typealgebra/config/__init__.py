"""Configuration package."""

from typealgebra.config.settings import AlgebraSettings, load_settings

__all__ = [
    "AlgebraSettings",
    "load_settings",
]
