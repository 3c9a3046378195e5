"""HTTP client for the latest-rates and historical-rate providers."""

import logging
from datetime import date

import httpx

from fx_trend_dashboard.config import Settings
from fx_trend_dashboard.exceptions import FetchFailed, ParseFailed
from fx_trend_dashboard.models import RateSnapshot


logger = logging.getLogger(__name__)

# Historical provider answers with no entry for the target when no
# conversion applies (e.g. same currency); treat it as parity.
MISSING_RATE = 1.0


def _coerce_rates(data: object, url: str) -> dict[str, float]:
    """Extract the `rates` object from a decoded body as floats."""
    if not isinstance(data, dict) or not isinstance(data.get("rates"), dict):
        raise ParseFailed(f"No rates object in response from {url}")

    rates: dict[str, float] = {}
    for code, value in data["rates"].items():
        # bool is an int subclass but never a rate
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ParseFailed(f"Non-numeric rate for {code} from {url}: {value!r}")
        rates[code] = float(value)
    return rates


class RateClient:
    """Fetches exchange rates from the two public providers.

    No retries and no caching: every call is one GET.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._client = client
        self._transport = transport
        self._owns_client = client is None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.settings.request_timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close HTTP client if we created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "RateClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _get_json(self, url: str, params: dict | None = None) -> object:
        """GET a URL and decode the JSON body."""
        try:
            response = self.client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise FetchFailed(f"Timed out requesting {url}", url=url) from e
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
            raise FetchFailed(f"Request to {url} failed: {e}", url=url) from e

        if response.status_code != 200:
            raise FetchFailed(
                f"{url} returned HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ParseFailed(f"Invalid JSON from {url}: {e}") from e

    def fetch_latest(self, base: str) -> RateSnapshot:
        """
        Fetch the latest rates of every currency against `base`.

        Raises:
            FetchFailed: transport error, timeout or non-200 status
            ParseFailed: body is not JSON or has no usable rates object
        """
        url = f"{self.settings.latest_url}/{base}"
        logger.info(f"Fetching latest rates for {base}")

        data = self._get_json(url)
        rates = _coerce_rates(data, url)
        logger.debug(f"  Received {len(rates)} rates for {base}")

        return RateSnapshot(base=base, rates=rates)

    def fetch_rate_for_date(self, base: str, target: str, day: date) -> float:
        """
        Fetch the `base`->`target` rate published for one calendar day.

        Returns 1.0 when the provider answers without a rate for `target`.

        Raises:
            FetchFailed: transport error, timeout or non-200 status
            ParseFailed: body is not JSON or has no usable rates object
        """
        url = f"{self.settings.historical_url}/{day.isoformat()}"
        logger.debug(f"Fetching {base}/{target} for {day}")

        data = self._get_json(url, params={"from": base, "to": target})
        rates = _coerce_rates(data, url)

        rate = rates.get(target)
        if rate is None:
            logger.warning(f"No {target} rate in {day} response, using {MISSING_RATE}")
            return MISSING_RATE
        return rate
