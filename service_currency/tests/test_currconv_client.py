"""
Unit tests for the currency converter API client.
"""

import pytest
import httpx

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_currency.app.adapters.currconv_client import CurrencyConverterClient, ProviderResponse
from shared.errors import ExternalServiceError
from shared.test_helpers import ProviderStub


class TestCurrencyConverterClient:
    """Test cases for CurrencyConverterClient."""

    @pytest.fixture
    def stub(self):
        """Provider stub."""
        return ProviderStub(200, {"USD_EUR": 0.92})

    @pytest.fixture
    def client(self, stub):
        """Client wired to the stub."""
        return CurrencyConverterClient("https://currconv.test/", "secret-key", transport=stub.transport())

    @pytest.mark.asyncio
    async def test_fetch_builds_query(self, client, stub):
        """The request carries the pair key, compact mode and credential."""
        await client.fetch("USD_EUR")

        request = stub.requests[0]
        assert request.method == "GET"
        assert request.url.host == "currconv.test"
        assert request.url.path == "/api/v7/convert"
        assert request.url.params["q"] == "USD_EUR"
        assert request.url.params["compact"] == "ultra"
        assert request.url.params["apiKey"] == "secret-key"

    @pytest.mark.asyncio
    async def test_fetch_returns_raw_success(self, client):
        """Success responses are returned uninterpreted."""
        response = await client.fetch("USD_EUR")

        assert response == ProviderResponse(200, b'{"USD_EUR": 0.92}')
        assert response.ok

    @pytest.mark.asyncio
    async def test_fetch_returns_raw_error(self, client, stub):
        """Error statuses are not raised; the caller interprets them."""
        stub.respond(400, '{"status":400,"error":"invalid currency"}\n')

        response = await client.fetch("USD_XXX")

        assert response.status_code == 400
        assert not response.ok
        assert response.text == '{"status":400,"error":"invalid currency"}'

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, client, stub):
        """Network failures are mapped to ExternalServiceError."""
        stub.fail_with(httpx.ConnectTimeout("timed out"))

        with pytest.raises(ExternalServiceError) as exc_info:
            await client.fetch("USD_EUR")

        assert exc_info.value.message == "timed out"
        assert exc_info.value.service == "currconv"
        assert exc_info.value.details == {"query": "USD_EUR"}

    @pytest.mark.asyncio
    async def test_transport_error_without_message(self, client, stub):
        """Errors with an empty description fall back to the exception name."""
        stub.fail_with(httpx.ReadTimeout(""))

        with pytest.raises(ExternalServiceError, match="ReadTimeout"):
            await client.fetch("USD_EUR")

    @pytest.mark.asyncio
    async def test_client_is_reused_and_closed(self, client):
        """One pooled client serves every request until closed."""
        await client.fetch("USD_EUR")
        pooled = client._client
        await client.fetch("USD_EUR")

        assert client._client is pooled

        await client.close()
        assert client._client is None
        assert pooled.is_closed

    def test_timeout_configured(self, stub):
        """The configured timeout is applied to the pooled client."""
        client = CurrencyConverterClient("https://currconv.test", "k", timeout=3.5, transport=stub.transport())

        assert client._get_client().timeout == httpx.Timeout(3.5)
