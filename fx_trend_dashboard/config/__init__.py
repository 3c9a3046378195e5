"""Application configuration."""

from .settings import (
    HISTORICAL_RATES_URL,
    LATEST_RATES_URL,
    UNSUPPORTED_HISTORICAL,
    Settings,
)

__all__ = ["Settings", "LATEST_RATES_URL", "HISTORICAL_RATES_URL", "UNSUPPORTED_HISTORICAL"]
