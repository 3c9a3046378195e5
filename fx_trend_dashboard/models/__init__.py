"""Value types for currencies, rates and historical series."""

from fx_trend_dashboard.models.currency import (
    CURRENCIES,
    CurrencyRef,
    get_currency,
    list_currencies,
)
from fx_trend_dashboard.models.rates import (
    HistoricalSeries,
    RatePoint,
    RateSnapshot,
    Trend,
)

__all__ = [
    "CURRENCIES",
    "CurrencyRef",
    "get_currency",
    "list_currencies",
    "HistoricalSeries",
    "RatePoint",
    "RateSnapshot",
    "Trend",
]
