from datetime import date

import httpx
import pytest

from fx_trend_dashboard.config import Settings
from fx_trend_dashboard.data import RateClient
from fx_trend_dashboard.exceptions import FetchFailed, ParseFailed
from fx_trend_dashboard.pipeline import ConversionPipeline


class TestFetchLatest:
    def test_returns_snapshot(self, rate_client, providers) -> None:
        providers.latest["USD"] = {"EUR": 0.85, "GBP": 0.79}

        snapshot = rate_client.fetch_latest("USD")

        assert snapshot.base == "USD"
        assert snapshot.rates == {"EUR": 0.85, "GBP": 0.79}
        assert providers.requests[0].url == "https://api.exchangerate-api.com/v4/latest/USD"

    def test_integer_rates_become_floats(self, rate_client, providers) -> None:
        providers.latest["USD"] = {"USD": 1, "JPY": 150}

        snapshot = rate_client.fetch_latest("USD")

        assert snapshot.rates["USD"] == 1.0
        assert isinstance(snapshot.rates["USD"], float)
        assert isinstance(snapshot.rates["JPY"], float)

    def test_non_200_status(self, rate_client, providers) -> None:
        providers.latest["USD"] = 503

        with pytest.raises(FetchFailed) as exc:
            rate_client.fetch_latest("USD")

        assert exc.value.status_code == 503
        assert exc.value.is_http_error

    def test_invalid_json(self, rate_client, providers) -> None:
        providers.latest["USD"] = "<html>maintenance</html>"

        with pytest.raises(ParseFailed):
            rate_client.fetch_latest("USD")

    def test_missing_rates_object(self, rate_client, providers) -> None:
        providers.latest["USD"] = {"rates": ["EUR", 0.85]}

        with pytest.raises(ParseFailed):
            rate_client.fetch_latest("USD")

    def test_non_numeric_rate(self, rate_client, providers) -> None:
        providers.latest["USD"] = {"EUR": "0.85"}

        with pytest.raises(ParseFailed):
            rate_client.fetch_latest("USD")

    def test_transport_error(self, rate_client, providers) -> None:
        providers.latest["USD"] = httpx.ConnectError("connection refused")

        with pytest.raises(FetchFailed) as exc:
            rate_client.fetch_latest("USD")

        assert exc.value.status_code is None
        assert not exc.value.is_http_error

    def test_timeout(self, rate_client, providers) -> None:
        providers.latest["USD"] = httpx.ReadTimeout("timed out")

        with pytest.raises(FetchFailed) as exc:
            rate_client.fetch_latest("USD")

        assert "Timed out" in str(exc.value)
        assert isinstance(exc.value.__cause__, httpx.TimeoutException)


class TestFetchRateForDate:
    def test_returns_rate(self, rate_client, providers) -> None:
        providers.daily["2024-03-10"] = 0.91

        rate = rate_client.fetch_rate_for_date("USD", "EUR", date(2024, 3, 10))

        assert rate == 0.91
        request = providers.requests[0]
        assert request.url.path == "/2024-03-10"
        assert request.url.params["from"] == "USD"
        assert request.url.params["to"] == "EUR"

    def test_missing_target_is_parity(self, rate_client, providers) -> None:
        providers.daily["2024-03-10"] = {"rates": {}}

        assert rate_client.fetch_rate_for_date("USD", "EUR", date(2024, 3, 10)) == 1.0

    def test_non_200_status(self, rate_client, providers) -> None:
        providers.daily["2024-03-10"] = 404

        with pytest.raises(FetchFailed) as exc:
            rate_client.fetch_rate_for_date("USD", "EUR", date(2024, 3, 10))

        assert exc.value.status_code == 404

    def test_parse_error(self, rate_client, providers) -> None:
        providers.daily["2024-03-10"] = "not json"

        with pytest.raises(ParseFailed):
            rate_client.fetch_rate_for_date("USD", "EUR", date(2024, 3, 10))


class TestClientLifecycle:
    def test_lazy_client_uses_timeout(self) -> None:
        client = RateClient(Settings(request_timeout=3.5))
        try:
            assert client.client.timeout.read == 3.5
        finally:
            client.close()
        assert client._client is None

    def test_injected_client_is_not_closed(self, settings) -> None:
        http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with RateClient(settings, client=http):
            pass
        assert not http.is_closed
        http.close()


def moved_provider(request: httpx.Request) -> httpx.Response:
    """Old hosts answer 301 pointing at new ones; new hosts serve rates."""
    moves = {
        "api.frankfurter.app": "api.frankfurter.dev",
        "api.exchangerate-api.com": "v6.exchangerate-api.com",
    }
    if request.url.host in moves:
        location = request.url.copy_with(host=moves[request.url.host])
        return httpx.Response(301, headers={"Location": str(location)})
    if request.url.host == "api.frankfurter.dev":
        return httpx.Response(200, json={"rates": {request.url.params["to"]: 0.9}})
    return httpx.Response(200, json={"base": "USD", "rates": {"EUR": 0.5}})


class TestRedirects:
    def test_lazy_client_follows_redirects(self, settings) -> None:
        client = RateClient(settings)
        try:
            assert client.client.follow_redirects
        finally:
            client.close()

    def test_moved_historical_host(self, settings) -> None:
        with RateClient(settings, transport=httpx.MockTransport(moved_provider)) as client:
            rate = client.fetch_rate_for_date("USD", "EUR", date(2024, 3, 10))

        assert rate == 0.9

    def test_moved_latest_host(self, settings) -> None:
        with RateClient(settings, transport=httpx.MockTransport(moved_provider)) as client:
            snapshot = client.fetch_latest("USD")

        assert snapshot.rates == {"EUR": 0.5}

    def test_history_uses_real_data_after_redirect(self, settings, today) -> None:
        client = RateClient(settings, transport=httpx.MockTransport(moved_provider))
        with ConversionPipeline(client, today=lambda: today) as pipeline:
            series = pipeline.historical_series("USD", "EUR")

        assert not series.used_fallback
        assert series.rates == [0.9] * 7


class TestUnexpectedHttpxErrors:
    def test_invalid_url_is_fetch_failed(self, rate_client, providers) -> None:
        providers.daily["2024-03-10"] = httpx.InvalidURL("bad host")

        with pytest.raises(FetchFailed) as exc:
            rate_client.fetch_rate_for_date("USD", "EUR", date(2024, 3, 10))

        assert exc.value.status_code is None
