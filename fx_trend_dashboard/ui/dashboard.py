"""Streamlit app for currency conversion and exchange-rate trends.

Two tabs:
- Converter: keypad amount entry, from/to selection, swap
- Analysis: 7-day trend chart with projection and a rate table
"""

import logging
from datetime import datetime

import pandas as pd
import streamlit as st

from fx_trend_dashboard.config import Settings
from fx_trend_dashboard.data import RateClient
from fx_trend_dashboard.exceptions import RateUnavailable
from fx_trend_dashboard.indicators.projection import classify_trend
from fx_trend_dashboard.models import CURRENCIES, CurrencyRef, get_currency
from fx_trend_dashboard.pipeline import ConversionPipeline
from fx_trend_dashboard.ui import state as actions
from fx_trend_dashboard.ui.charts import TREND_COLORS, build_trend_figure
from fx_trend_dashboard.ui.keypad import KEYPAD_ROWS
from fx_trend_dashboard.ui.state import AnalysisState, ConverterState


logger = logging.getLogger(__name__)

ACCENT = "#ff6b35"
CODES = [c.code for c in CURRENCIES]


def flag_emoji(currency: CurrencyRef) -> str:
    """Regional indicator pair for the currency's flag region."""
    return "".join(chr(0x1F1E6 + ord(ch) - ord("A")) for ch in currency.flag_region)


def get_pipeline() -> ConversionPipeline:
    """One pipeline per browser session."""
    if "pipeline" not in st.session_state:
        settings = Settings()
        settings.validate()
        settings.configure_logging()
        st.session_state.pipeline = ConversionPipeline(RateClient(settings))
    return st.session_state.pipeline


def get_state(key: str, factory):
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def dispatch(key: str, action, *args) -> None:
    st.session_state[key] = action(st.session_state[key], *args)


# =============================================================================
# TAB 1: CONVERTER
# =============================================================================

def run_conversion(pipeline: ConversionPipeline) -> None:
    """Convert the current amount, recording success or failure in state."""
    conv: ConverterState = st.session_state.converter
    amount = conv.amount
    if amount is None:
        return

    dispatch("converter", actions.start_conversion)
    try:
        rate = pipeline.get_rate(conv.from_currency.code, conv.to_currency.code)
    except RateUnavailable as e:
        logger.error(f"Conversion failed: {e}")
        dispatch("converter", actions.conversion_failed, str(e))
        st.toast(f"Error: {e}")
        return
    dispatch("converter", actions.conversion_succeeded, amount * rate, rate)


def render_currency_box(label: str, currency: CurrencyRef, value: str) -> None:
    st.markdown(
        f"""
        <div style="background: #1a1a1a; border: 1px solid #333; border-radius: 12px; padding: 1rem 1.25rem;">
            <div style="color: #9ca3af; font-size: 0.75rem; text-transform: uppercase;">{label}</div>
            <div style="color: #f5f5f5; font-size: 0.95rem; margin-top: 0.25rem;">
                {flag_emoji(currency)} {currency.label}
            </div>
            <div style="color: #ffffff; font-size: 2rem; font-weight: 600; font-family: 'SF Mono', monospace;">
                {value or "0"}
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_keypad() -> None:
    for row in KEYPAD_ROWS:
        cols = st.columns(len(row))
        for col, key in zip(cols, row):
            col.button(
                key,
                key=f"keypad_{key}",
                use_container_width=True,
                on_click=dispatch,
                args=("converter", actions.press_key, key),
            )
    st.button(
        "C",
        key="keypad_clear",
        use_container_width=True,
        on_click=dispatch,
        args=("converter", actions.press_key, "C"),
    )


def render_converter_tab(pipeline: ConversionPipeline) -> None:
    conv: ConverterState = get_state("converter", ConverterState)

    col_from, col_swap, col_to = st.columns([5, 1, 5])
    with col_from:
        from_code = st.selectbox(
            "From", CODES, index=CODES.index(conv.from_currency.code), key="from_code"
        )
    with col_to:
        to_code = st.selectbox(
            "To", CODES, index=CODES.index(conv.to_currency.code), key="to_code"
        )
    with col_swap:
        st.markdown("<div style='height: 1.8rem;'></div>", unsafe_allow_html=True)
        swapped = st.button("⇅", key="swap", use_container_width=True)

    if swapped:
        dispatch("converter", actions.swap)
        # Selectbox widgets own their value; reset them to follow the swap
        del st.session_state["from_code"]
        del st.session_state["to_code"]
        st.rerun()

    if from_code != conv.from_currency.code:
        dispatch("converter", actions.select_from, get_currency(from_code))
    if to_code != conv.to_currency.code:
        dispatch("converter", actions.select_to, get_currency(to_code))
    conv = st.session_state.converter

    request = (conv.amount_text, conv.from_currency.code, conv.to_currency.code)
    if st.session_state.get("last_conversion") != request:
        st.session_state.last_conversion = request
        with st.spinner("Converting..."):
            run_conversion(pipeline)
        conv = st.session_state.converter

    render_currency_box("Amount", conv.from_currency, conv.amount_text)
    st.markdown("<div style='height: 0.5rem;'></div>", unsafe_allow_html=True)
    render_currency_box("Converted", conv.to_currency, conv.result_text)

    if conv.rate_line:
        st.markdown(
            f"<div style='color: {ACCENT}; text-align: center; margin: 0.75rem 0;'>{conv.rate_line}</div>",
            unsafe_allow_html=True,
        )
    if conv.error:
        st.error(conv.error)

    render_keypad()


# =============================================================================
# TAB 2: ANALYSIS
# =============================================================================

def load_rates(pipeline: ConversionPipeline) -> None:
    analysis: AnalysisState = st.session_state.analysis
    dispatch("analysis", actions.start_rates)
    try:
        snapshot = pipeline.all_rates(analysis.base.code)
    except RateUnavailable as e:
        logger.error(f"Loading rates failed: {e}")
        dispatch("analysis", actions.analysis_failed, str(e))
        st.toast(f"Error loading rates: {e}")
        return
    dispatch("analysis", actions.rates_loaded, snapshot)


def load_chart(pipeline: ConversionPipeline) -> None:
    analysis: AnalysisState = st.session_state.analysis
    dispatch("analysis", actions.start_chart)
    try:
        series = pipeline.trend_series(analysis.base.code, analysis.selected.code)
    except RateUnavailable as e:
        logger.error(f"Loading chart failed: {e}")
        dispatch("analysis", actions.analysis_failed, str(e))
        st.toast(f"Error loading chart: {e}")
        return
    dispatch("analysis", actions.chart_loaded, series)


def render_trend_chart(analysis: AnalysisState) -> None:
    st.markdown(
        f"""<div style="display: flex; justify-content: space-between; align-items: baseline;">
            <span style="color: #f5f5f5; font-weight: 600;">Historical Trend (7 Days)</span>
            <span style="color: {ACCENT}; font-family: 'SF Mono', monospace;">{analysis.base.code}/{analysis.selected.code}</span>
        </div>""",
        unsafe_allow_html=True,
    )

    series = analysis.series
    if series is None or not series.historical:
        st.info("No data available")
        return

    fig = build_trend_figure(series)
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})

    trend = classify_trend(series)
    st.markdown(
        f"<div style='color: {TREND_COLORS[trend]}; font-size: 0.8rem;'>Trend: {trend.value}</div>",
        unsafe_allow_html=True,
    )
    if series.used_fallback:
        st.caption(
            "Historical data is not available for this pair; "
            "the chart shows an estimate around the current rate."
        )


def render_rate_table(analysis: AnalysisState) -> None:
    st.markdown("#### Exchange Rates")
    if analysis.rates is None:
        return

    rows = []
    for currency in analysis.comparison_currencies:
        rate = analysis.rates.rate_for(currency.code)
        rows.append({
            "": flag_emoji(currency),
            "Code": currency.code,
            "Currency": currency.name,
            "Rate": f"{rate:.4f}" if rate is not None else "N/A",
        })

    st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)


def render_analysis_tab(pipeline: ConversionPipeline) -> None:
    analysis: AnalysisState = get_state("analysis", AnalysisState)

    col_title, col_base, col_pair = st.columns([3, 1, 1])
    with col_title:
        st.markdown("### Exchange Analysis")
    with col_base:
        base_code = st.selectbox(
            "Base", CODES, index=CODES.index(analysis.base.code), key="base_code"
        )
    others = [c for c in CODES if c != base_code]
    selected_code = analysis.selected.code if analysis.selected.code in others else others[0]
    with col_pair:
        selected_code = st.selectbox(
            "Compare", others, index=others.index(selected_code), key="compare_code"
        )

    if base_code != analysis.base.code:
        dispatch("analysis", actions.select_base, get_currency(base_code))
    if selected_code != st.session_state.analysis.selected.code:
        dispatch("analysis", actions.select_comparison, get_currency(selected_code))
    analysis = st.session_state.analysis

    if analysis.rates is None and not analysis.error:
        with st.spinner("Loading rates..."):
            load_rates(pipeline)

    pair = (analysis.base.code, analysis.selected.code)
    if st.session_state.get("charted_pair") != pair:
        st.session_state.charted_pair = pair
        with st.spinner("Loading chart..."):
            load_chart(pipeline)

    analysis = st.session_state.analysis
    render_trend_chart(analysis)
    st.markdown("---")
    render_rate_table(analysis)


# =============================================================================
# MAIN APP
# =============================================================================

def main() -> None:
    """Dashboard entry point."""
    st.set_page_config(
        page_title="Currency Converter",
        page_icon="",
        layout="centered",
    )

    st.markdown(
        """
        <style>
            .stApp { background-color: #0d0d0d; }
            .stMarkdown, .stText, p, span, label { color: #e5e5e5; }
            h1, h2, h3, h4 { color: #f5f5f5 !important; }
            .stTabs [aria-selected="true"] {
                color: #ff6b35 !important;
                border-bottom-color: #ff6b35 !important;
            }
            #MainMenu, footer { visibility: hidden; }
        </style>
        """,
        unsafe_allow_html=True,
    )

    try:
        pipeline = get_pipeline()
    except ValueError as e:
        st.error(f"Configuration error: {e}")
        return

    st.markdown(
        f"""<div style="color: #64748b; font-size: 0.7rem; text-align: right;">
            Rates: exchangerate-api.com + frankfurter.app | {datetime.now().strftime('%H:%M')}
        </div>""",
        unsafe_allow_html=True,
    )

    tab1, tab2 = st.tabs(["Converter", "Analysis"])

    with tab1:
        render_converter_tab(pipeline)

    with tab2:
        render_analysis_tab(pipeline)


if __name__ == "__main__":
    main()
