from datetime import date

import httpx
import pytest

from fx_trend_dashboard.config import Settings
from fx_trend_dashboard.data import RateClient
from fx_trend_dashboard.pipeline import ConversionPipeline


TODAY = date(2024, 3, 15)  # a Friday


class FakeProviders:
    """Routes requests for both rate providers to canned responses.

    `latest` maps a base code to its rates dict, an int status code, or an
    exception instance. `daily` does the same keyed by ISO date, with the
    value being a rate, a full body dict, a status code or an exception.
    """

    def __init__(self) -> None:
        self.latest: dict[str, object] = {}
        self.daily: dict[str, object] = {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.exchangerate-api.com":
            base = request.url.path.rsplit("/", 1)[-1]
            return self._respond(request, self.latest.get(base, 404), lambda r: {
                "base": base, "date": TODAY.isoformat(), "rates": r,
            })

        day = request.url.path.strip("/")
        target = request.url.params["to"]
        return self._respond(request, self.daily.get(day, 404), lambda r: {
            "base": request.url.params["from"], "date": day, "rates": {target: r},
        })

    def _respond(self, request, value, wrap) -> httpx.Response:
        if isinstance(value, Exception):
            raise value
        if isinstance(value, int) and not isinstance(value, bool) and value >= 100:
            return httpx.Response(value, json={"error": "unavailable"})
        if isinstance(value, str):
            return httpx.Response(200, text=value)
        if isinstance(value, dict) and "rates" in value:
            return httpx.Response(200, json=value)
        return httpx.Response(200, json=wrap(value))

    @property
    def historical_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "api.frankfurter.app"]


@pytest.fixture
def providers() -> FakeProviders:
    return FakeProviders()


@pytest.fixture
def settings() -> Settings:
    return Settings(request_timeout=10.0, log_level="INFO")


@pytest.fixture
def rate_client(providers: FakeProviders, settings: Settings) -> RateClient:
    client = RateClient(settings, transport=httpx.MockTransport(providers))
    yield client
    client.close()


@pytest.fixture
def pipeline(rate_client: RateClient) -> ConversionPipeline:
    return ConversionPipeline(rate_client, today=lambda: TODAY)


@pytest.fixture
def today() -> date:
    return TODAY
