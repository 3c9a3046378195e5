"""Static currency catalog."""

from dataclasses import dataclass

from fx_trend_dashboard.exceptions import UnknownCurrencyError


@dataclass(frozen=True)
class CurrencyRef:
    """A currency offered by the converter."""

    code: str  # ISO 4217
    name: str
    region: str  # ISO 3166 alpha-2, used for flag lookup

    @property
    def flag_region(self) -> str:
        # The euro has no country; the EU flag is used instead
        if self.code == "EUR":
            return "EU"
        return self.region

    @property
    def label(self) -> str:
        return f"{self.code} - {self.name}"


# Order matters: the first two entries are the default from/to pair
CURRENCIES: tuple[CurrencyRef, ...] = (
    CurrencyRef("XAF", "CFA Franc", "CM"),
    CurrencyRef("USD", "US Dollar", "US"),
    CurrencyRef("EUR", "Euro", "EU"),
    CurrencyRef("GBP", "British Pound", "GB"),
    CurrencyRef("JPY", "Japanese Yen", "JP"),
    CurrencyRef("CAD", "Canadian Dollar", "CA"),
    CurrencyRef("AUD", "Australian Dollar", "AU"),
    CurrencyRef("CHF", "Swiss Franc", "CH"),
    CurrencyRef("CNY", "Chinese Yuan", "CN"),
    CurrencyRef("INR", "Indian Rupee", "IN"),
    CurrencyRef("MXN", "Mexican Peso", "MX"),
    CurrencyRef("BRL", "Brazilian Real", "BR"),
    CurrencyRef("ZAR", "South African Rand", "ZA"),
    CurrencyRef("RUB", "Russian Ruble", "RU"),
    CurrencyRef("KRW", "South Korean Won", "KR"),
    CurrencyRef("SGD", "Singapore Dollar", "SG"),
)

_BY_CODE: dict[str, CurrencyRef] = {c.code: c for c in CURRENCIES}


def list_currencies() -> list[CurrencyRef]:
    """Return the catalog in display order."""
    return list(CURRENCIES)


def get_currency(code: str) -> CurrencyRef:
    """Look up a catalog entry by code (case-insensitive)."""
    try:
        return _BY_CODE[code.strip().upper()]
    except KeyError:
        raise UnknownCurrencyError(code) from None
