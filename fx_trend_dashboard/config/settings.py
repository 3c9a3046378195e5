"""Configuration settings for the converter and dashboard."""

from dataclasses import dataclass, field
import logging
import math
import os

from dotenv import load_dotenv


load_dotenv()


# Rate providers - fixed endpoints, not configurable
LATEST_RATES_URL = "https://api.exchangerate-api.com/v4/latest"
HISTORICAL_RATES_URL = "https://api.frankfurter.app"

# Currencies the historical provider does not quote
UNSUPPORTED_HISTORICAL: frozenset[str] = frozenset({"XAF", "RUB"})

DEFAULT_TIMEOUT = 10.0  # seconds


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class Settings:
    """Application settings."""

    request_timeout: float = field(
        default_factory=lambda: _float_env("FX_REQUEST_TIMEOUT", DEFAULT_TIMEOUT)
    )
    log_level: str = field(
        default_factory=lambda: os.getenv("FX_LOG_LEVEL", "INFO").upper()
    )
    latest_url: str = field(default=LATEST_RATES_URL, init=False)
    historical_url: str = field(default=HISTORICAL_RATES_URL, init=False)

    def validate(self) -> None:
        """Validate settings."""
        if not math.isfinite(self.request_timeout) or self.request_timeout <= 0:
            raise ValueError(
                f"Request timeout must be a positive finite number, got {self.request_timeout}"
            )
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    def configure_logging(self) -> None:
        """Set up root logging for entry points."""
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s - %(levelname)s - %(message)s",
        )
