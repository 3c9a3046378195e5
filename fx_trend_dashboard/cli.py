"""Command-line access to conversions, rate tables and 7-day trends."""

import argparse
import logging
import sys

from fx_trend_dashboard.config import Settings
from fx_trend_dashboard.data import RateClient
from fx_trend_dashboard.exceptions import RateUnavailable, UnknownCurrencyError
from fx_trend_dashboard.indicators.projection import classify_trend
from fx_trend_dashboard.models import get_currency, list_currencies
from fx_trend_dashboard.pipeline import ConversionPipeline


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fx-trend", description="Currency conversion and exchange-rate trends"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert an amount")
    convert.add_argument("amount", type=float)
    convert.add_argument("from_code", metavar="FROM")
    convert.add_argument("to_code", metavar="TO")

    rates = sub.add_parser("rates", help="Show current rates against a base")
    rates.add_argument("base")

    history = sub.add_parser("history", help="Show the 7-day trend for a pair")
    history.add_argument("base")
    history.add_argument("target")

    sub.add_parser("currencies", help="List supported currencies")

    return parser


def print_currencies() -> None:
    print("\nSupported currencies:")
    print("-" * 40)
    for currency in list_currencies():
        print(f"{currency.code:5} | {currency.flag_region:3} | {currency.name}")


def print_rates(pipeline: ConversionPipeline, base: str) -> None:
    snapshot = pipeline.all_rates(base)
    print(f"\nRates against {base}:")
    print("-" * 40)
    for currency in list_currencies():
        if currency.code == base:
            continue
        rate = snapshot.rate_for(currency.code)
        shown = f"{rate:12.4f}" if rate is not None else f"{'N/A':>12}"
        print(f"{currency.code:5} | {shown} | {currency.name}")


def print_history(pipeline: ConversionPipeline, base: str, target: str) -> None:
    series = pipeline.trend_series(base, target)
    df = series.to_frame()

    print(f"\n{series.pair} - last 7 days")
    if series.used_fallback:
        print("(estimated: historical data unavailable for this pair)")
    print("-" * 40)
    for row in df.itertuples(index=False):
        marker = "*" if row.kind == "projected" else " "
        print(f"{row.date:%a %Y-%m-%d} {marker} {row.rate:12.6f}")
    print("-" * 40)
    print(f"Trend: {classify_trend(series).value}   (* = projection)")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings()
        settings.validate()
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    settings.configure_logging()

    if args.command == "currencies":
        print_currencies()
        return

    try:
        with ConversionPipeline(RateClient(settings)) as pipeline:
            if args.command == "convert":
                from_code = get_currency(args.from_code).code
                to_code = get_currency(args.to_code).code
                result = pipeline.convert(args.amount, from_code, to_code)
                print(f"{args.amount:.2f} {from_code} = {result:.2f} {to_code}")
            elif args.command == "rates":
                print_rates(pipeline, get_currency(args.base).code)
            elif args.command == "history":
                print_history(
                    pipeline,
                    get_currency(args.base).code,
                    get_currency(args.target).code,
                )
    except UnknownCurrencyError as e:
        print(f"{e}. Available: {', '.join(c.code for c in list_currencies())}")
        sys.exit(1)
    except RateUnavailable as e:
        logger.error(f"CLI request failed: {e}")
        print(f"Rates unavailable: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
