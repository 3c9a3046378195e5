"""View state for the converter and analysis tabs.

States are immutable; every action returns a new state. Network calls
happen outside, in the dashboard, which dispatches the result back here.
Failure actions always clear the loading flags.
"""

from dataclasses import dataclass, replace

from fx_trend_dashboard.models import (
    CURRENCIES,
    CurrencyRef,
    HistoricalSeries,
    RateSnapshot,
)
from fx_trend_dashboard.ui import keypad


@dataclass(frozen=True)
class ConverterState:
    from_currency: CurrencyRef = CURRENCIES[0]
    to_currency: CurrencyRef = CURRENCIES[1]
    amount_text: str = "1"
    result_text: str = ""
    rate: float | None = None
    loading: bool = False
    error: str | None = None

    @property
    def amount(self) -> float | None:
        return keypad.parse_amount(self.amount_text)

    @property
    def rate_line(self) -> str:
        if not self.rate:
            return ""
        return f"1 {self.from_currency.code} = {self.rate:.4f} {self.to_currency.code}"


@dataclass(frozen=True)
class AnalysisState:
    base: CurrencyRef = CURRENCIES[1]
    selected: CurrencyRef = CURRENCIES[2]
    rates: RateSnapshot | None = None
    series: HistoricalSeries | None = None
    loading_rates: bool = False
    loading_chart: bool = False
    error: str | None = None

    @property
    def comparison_currencies(self) -> list[CurrencyRef]:
        """Catalog entries shown as rate rows, base excluded."""
        return [c for c in CURRENCIES if c.code != self.base.code]


# Converter actions

def press_key(state: ConverterState, key: str) -> ConverterState:
    return replace(state, amount_text=keypad.apply_key(state.amount_text, key))


def select_from(state: ConverterState, currency: CurrencyRef) -> ConverterState:
    return replace(state, from_currency=currency)


def select_to(state: ConverterState, currency: CurrencyRef) -> ConverterState:
    return replace(state, to_currency=currency)


def swap(state: ConverterState) -> ConverterState:
    """Swap currencies and the amount/result texts."""
    return replace(
        state,
        from_currency=state.to_currency,
        to_currency=state.from_currency,
        amount_text=state.result_text,
        result_text=state.amount_text,
    )


def start_conversion(state: ConverterState) -> ConverterState:
    return replace(state, loading=True, error=None)


def conversion_succeeded(state: ConverterState, result: float, rate: float) -> ConverterState:
    return replace(
        state, result_text=f"{result:.2f}", rate=rate, loading=False, error=None
    )


def conversion_failed(state: ConverterState, message: str) -> ConverterState:
    return replace(state, loading=False, error=message)


# Analysis actions

def select_base(state: AnalysisState, currency: CurrencyRef) -> AnalysisState:
    return replace(state, base=currency, rates=None, series=None, error=None)


def select_comparison(state: AnalysisState, currency: CurrencyRef) -> AnalysisState:
    return replace(state, selected=currency)


def start_rates(state: AnalysisState) -> AnalysisState:
    return replace(state, loading_rates=True, error=None)


def rates_loaded(state: AnalysisState, rates: RateSnapshot) -> AnalysisState:
    return replace(state, rates=rates, loading_rates=False)


def start_chart(state: AnalysisState) -> AnalysisState:
    return replace(state, loading_chart=True, error=None)


def chart_loaded(state: AnalysisState, series: HistoricalSeries) -> AnalysisState:
    return replace(state, series=series, loading_chart=False)


def analysis_failed(state: AnalysisState, message: str) -> AnalysisState:
    return replace(state, loading_rates=False, loading_chart=False, error=message)
