"""Exception hierarchy for the converter.

Transport and decoding problems are raised by the rate client as
FetchFailed / ParseFailed. The pipeline wraps them in RateUnavailable,
which is the only error presentation code needs to handle.
"""

from typing import Any


class FxDashboardError(Exception):
    """Base exception for all converter errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}


class FetchFailed(FxDashboardError):
    """Transport failure, timeout or non-200 response from a rate provider."""

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context=context)
        self.url = url
        self.status_code = status_code

    @property
    def is_http_error(self) -> bool:
        """True when the provider answered with a non-200 status."""
        return self.status_code is not None


class ParseFailed(FxDashboardError):
    """Response body is not the expected JSON shape."""


class RateUnavailable(FxDashboardError):
    """A pipeline operation could not produce a rate."""

    def __init__(
        self,
        operation: str,
        base: str,
        target: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        pair = f"{base}/{target}" if target else base
        message = f"{operation} failed for {pair}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(
            message,
            context={"operation": operation, "base": base, "target": target},
        )
        self.operation = operation
        self.base = base
        self.target = target
        self.cause = cause


class UnknownCurrencyError(FxDashboardError, KeyError):
    """Currency code is not in the catalog."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Unknown currency: {code}", context={"code": code})
        self.code = code

    def __str__(self) -> str:
        return self.message
