"""Trend indicators derived from historical series."""

from fx_trend_dashboard.indicators.projection import classify_trend, project

__all__ = ["project", "classify_trend"]
