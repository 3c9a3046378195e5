"""Plotly chart for the 7-day trend."""

from datetime import date

import plotly.graph_objects as go

from fx_trend_dashboard.indicators.projection import classify_trend
from fx_trend_dashboard.models import HistoricalSeries, Trend


TREND_COLORS = {
    Trend.UP: "#10b981",
    Trend.DOWN: "#ef4444",
    Trend.FLAT: "#ff6b35",
}

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def day_name(day: date) -> str:
    return DAY_NAMES[day.weekday()]


def trend_color(series: HistoricalSeries) -> str:
    return TREND_COLORS[classify_trend(series)]


def build_trend_figure(series: HistoricalSeries, today: date | None = None) -> go.Figure:
    """
    Historical line with dashed projection, coloured by trend direction.

    Args:
        series: Series with projection attached (may be empty)
        today: Reference date for axis labels

    Returns:
        Plotly figure
    """
    df = series.to_frame(today)
    color = trend_color(series)
    fig = go.Figure()

    hist = df[df["kind"] == "historical"]
    fig.add_trace(go.Scatter(
        x=hist["date"], y=hist["rate"],
        mode="lines+markers", line=dict(color=color, width=3, shape="spline"),
        marker=dict(size=6, color=color),
        name="Historical",
        hovertemplate="%{x|%a %d %b}: %{y:.4f}<extra></extra>",
    ))

    proj = df[df["kind"] == "projected"]
    if not proj.empty:
        fig.add_trace(go.Scatter(
            x=proj["date"], y=proj["rate"],
            mode="lines", line=dict(color=color, width=2, dash="dash", shape="spline"),
            opacity=0.7,
            name="Projection",
            hovertemplate="%{x|%a %d %b}: %{y:.4f}<extra></extra>",
        ))

    # Label first, middle and last historical days only
    tick_dates = []
    if not hist.empty:
        n = len(hist)
        tick_dates = [hist["date"].iloc[i] for i in sorted({0, n // 2, n - 1})]

    fig.update_layout(
        height=260,
        margin=dict(l=10, r=10, t=10, b=10),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        legend=dict(orientation="h", yanchor="bottom", y=-0.3, xanchor="center", x=0.5),
        xaxis=dict(
            showgrid=False,
            tickmode="array",
            tickvals=tick_dates,
            ticktext=[day_name(d.date()) for d in tick_dates],
        ),
        yaxis=dict(gridcolor="#334155", tickformat=".3f"),
    )

    return fig
