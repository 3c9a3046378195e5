"""Rate provider access."""

from .rate_client import RateClient

__all__ = ["RateClient"]
