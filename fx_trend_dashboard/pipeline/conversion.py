"""Conversion, bulk rates and the 7-day historical series."""

import logging
from datetime import date, timedelta
from typing import Callable

from fx_trend_dashboard.config import UNSUPPORTED_HISTORICAL
from fx_trend_dashboard.data.rate_client import MISSING_RATE, RateClient
from fx_trend_dashboard.exceptions import FetchFailed, FxDashboardError, RateUnavailable
from fx_trend_dashboard.indicators.projection import project
from fx_trend_dashboard.models import HistoricalSeries, RatePoint, RateSnapshot


logger = logging.getLogger(__name__)

HISTORY_DAYS = 7

# Synthetic series: rate_i = current * (1 + i * STEP - OFFSET) for i in 6..0
FALLBACK_STEP = 0.003
FALLBACK_OFFSET = 0.009


class ConversionPipeline:
    """Turns provider responses into conversions and chartable series.

    `historical_series` is the only operation that absorbs provider
    errors; everything else raises RateUnavailable.
    """

    def __init__(
        self,
        client: RateClient | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.client = client or RateClient()
        self._today = today

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "ConversionPipeline":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def get_rate(self, base: str, target: str) -> float:
        """Current `base`->`target` rate, 1.0 if the provider has none."""
        try:
            snapshot = self.client.fetch_latest(base)
        except FxDashboardError as e:
            raise RateUnavailable("rate lookup", base, target, cause=e) from e

        rate = snapshot.rate_for(target)
        if rate is None:
            logger.warning(f"No {target} rate against {base}, using {MISSING_RATE}")
            return MISSING_RATE
        return rate

    def convert(self, amount: float, from_code: str, to_code: str) -> float:
        """Convert `amount` of `from_code` into `to_code`."""
        rate = self.get_rate(from_code, to_code)
        return amount * rate

    def all_rates(self, base: str) -> RateSnapshot:
        """All current rates against `base` in one round trip."""
        try:
            return self.client.fetch_latest(base)
        except FxDashboardError as e:
            raise RateUnavailable("all rates", base, cause=e) from e

    def historical_series(self, base: str, target: str) -> HistoricalSeries:
        """
        Fetch one rate per day for the last seven days, oldest first.

        Falls back to a synthetic series built from the current rate when
        the pair is not quoted historically, the provider answers with an
        error status, or the very first day cannot be fetched. Later
        transport or parse failures repeat the previous day's rate.

        Raises:
            RateUnavailable: only if the fallback's current-rate lookup fails
        """
        today = self._today()
        if base in UNSUPPORTED_HISTORICAL or target in UNSUPPORTED_HISTORICAL:
            logger.info(f"{base}/{target} not quoted historically, using fallback")
            return self._fallback_series(base, target, today)

        points: list[RatePoint] = []

        for offset in range(HISTORY_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            try:
                rate = self.client.fetch_rate_for_date(base, target, day)
            except FxDashboardError as e:
                if isinstance(e, FetchFailed) and e.is_http_error:
                    logger.warning(f"Historical provider error for {day}: {e}, using fallback")
                    return self._fallback_series(base, target, today)
                if not points:
                    logger.warning(f"First day {day} unavailable: {e}, using fallback")
                    return self._fallback_series(base, target, today)
                logger.warning(f"  {day} unavailable: {e}, carrying forward")
                rate = points[-1].rate

            points.append(RatePoint(offset=offset, rate=rate))

        logger.info(f"Fetched {len(points)} days of {base}/{target}")
        return HistoricalSeries(
            base=base, target=target, historical=tuple(points), as_of=today
        )

    def _fallback_series(self, base: str, target: str, today: date) -> HistoricalSeries:
        """Gentle synthetic trend around the current rate."""
        try:
            current = self.get_rate(base, target)
        except RateUnavailable as e:
            raise RateUnavailable("historical series", base, target, cause=e.cause) from e

        points = tuple(
            RatePoint(
                offset=offset,
                rate=current * (1 + offset * FALLBACK_STEP - FALLBACK_OFFSET),
            )
            for offset in range(HISTORY_DAYS - 1, -1, -1)
        )
        return HistoricalSeries(
            base=base, target=target, historical=points, used_fallback=True, as_of=today
        )

    def trend_series(self, base: str, target: str) -> HistoricalSeries:
        """Historical series with its projection attached."""
        series = self.historical_series(base, target)
        return series.with_projection(project(series))
