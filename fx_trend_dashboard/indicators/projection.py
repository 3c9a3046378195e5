"""Short-horizon projection and trend direction.

The projection extends the last observed day-over-day change two steps
forward. It is a visual aid on the chart, not a forecast.
"""

from typing import Sequence

from fx_trend_dashboard.models import HistoricalSeries, RatePoint, Trend


PROJECTION_STEPS = 2
MIN_POINTS = 3


def _points(series: HistoricalSeries | Sequence[RatePoint]) -> Sequence[RatePoint]:
    if isinstance(series, HistoricalSeries):
        return series.historical
    return series


def project(series: HistoricalSeries | Sequence[RatePoint]) -> list[RatePoint]:
    """
    Linear extrapolation of the last two historical points.

    Args:
        series: Historical series or its points, oldest first

    Returns:
        The last point as anchor followed by two extrapolated points,
        or an empty list with fewer than three historical points
    """
    points = _points(series)
    if len(points) < MIN_POINTS:
        return []

    last, prev = points[-1], points[-2]
    trend = last.rate - prev.rate

    return [
        RatePoint(offset=last.offset + step, rate=last.rate + step * trend)
        for step in range(PROJECTION_STEPS + 1)
    ]


def classify_trend(series: HistoricalSeries | Sequence[RatePoint]) -> Trend:
    """Compare first and last historical rates."""
    points = _points(series)
    if len(points) < 2:
        return Trend.FLAT

    first, last = points[0].rate, points[-1].rate
    if last > first:
        return Trend.UP
    elif last < first:
        return Trend.DOWN
    return Trend.FLAT
