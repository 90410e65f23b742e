"""
Tests for the Graph client factory and GraphClient requests.

Tests validate:
- Standard and beta clients share one token provider
- Bearer token attached from a fresh provider call per request
- Non-2xx, malformed and network failures raise UpstreamApiError
- Token failures propagate as AuthError
"""

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from auth.credentials import Credentials
from auth.token_provider import MockTokenProvider, RealTokenProvider, TokenProvider
from conftest import create_mock_get_session, create_mock_response
from core.exceptions import AuthError, UpstreamApiError
from graph.client import GRAPH_BASE_URL, GRAPH_BETA_URL, GraphClient, build_clients


class StubTokenProvider(TokenProvider):
    """Counts calls and hands out numbered tokens."""

    def __init__(self) -> None:
        self.calls = 0

    async def get_access_token(self) -> str:
        self.calls += 1
        return f"token-{self.calls}"


class TestBuildClients:
    """build_clients tests."""

    def test_clients_have_distinct_base_urls(self, mock_credential):
        """Verify the standard and beta clients target different versions."""
        clients = build_clients(
            Credentials("t", "c", "secret", ("User.Read",))
        )

        assert clients.standard.base_url == GRAPH_BASE_URL
        assert clients.beta.base_url == GRAPH_BETA_URL
        assert clients.standard.base_url.endswith("/v1.0")
        assert clients.beta.base_url.endswith("/beta")

    def test_clients_share_token_provider(self, mock_credential):
        """Verify one provider instance backs both clients."""
        clients = build_clients(
            Credentials("t", "c", "secret", ("User.Read",))
        )

        assert isinstance(clients.token_provider, RealTokenProvider)
        assert clients.standard.token_provider is clients.token_provider
        assert clients.beta.token_provider is clients.token_provider
        mock_credential.assert_called_once()

    def test_demo_credentials_share_mock_provider(self):
        """Verify demo credentials wire the mock provider into both clients."""
        clients = build_clients(
            Credentials("demo-tenant-id", "demo-client-id", "demo-client-secret", ("User.Read",))
        )

        assert isinstance(clients.token_provider, MockTokenProvider)
        assert clients.standard.token_provider is clients.beta.token_provider


class TestGraphClientGet:
    """GraphClient.get tests."""

    @pytest.mark.asyncio
    async def test_attaches_bearer_token(self):
        """Verify the Authorization header carries the provider's token."""
        captured = []
        mock_client = create_mock_get_session(
            create_mock_response(200, {"displayName": "Test User"}), captured
        )
        client = GraphClient(GRAPH_BASE_URL, StubTokenProvider())

        with patch("aiohttp.ClientSession", mock_client):
            body = await client.get("/me")

        assert body == {"displayName": "Test User"}
        assert captured[0]["url"] == "https://graph.microsoft.com/v1.0/me"
        assert captured[0]["headers"]["Authorization"] == "Bearer token-1"

    @pytest.mark.asyncio
    async def test_fetches_token_per_request(self):
        """Verify every request asks the provider for a token."""
        captured = []
        mock_client = create_mock_get_session(create_mock_response(200, {}), captured)
        provider = StubTokenProvider()
        client = GraphClient(GRAPH_BETA_URL, provider)

        with patch("aiohttp.ClientSession", mock_client):
            await client.get("/me/presence")
            await client.get("/me/presence")

        assert provider.calls == 2
        assert captured[1]["headers"]["Authorization"] == "Bearer token-2"
        assert captured[1]["url"] == "https://graph.microsoft.com/beta/me/presence"

    @pytest.mark.asyncio
    async def test_passes_params_and_extra_headers(self):
        """Verify query parameters are stringified and headers merged."""
        captured = []
        mock_client = create_mock_get_session(create_mock_response(200, {"value": []}), captured)
        client = GraphClient(GRAPH_BASE_URL, StubTokenProvider())

        with patch("aiohttp.ClientSession", mock_client):
            await client.get(
                "users",
                params={"$top": 5, "$search": '"displayName:ada"'},
                headers={"ConsistencyLevel": "eventual"},
            )

        assert captured[0]["url"] == "https://graph.microsoft.com/v1.0/users"
        assert captured[0]["params"] == {"$top": "5", "$search": '"displayName:ada"'}
        assert captured[0]["headers"]["ConsistencyLevel"] == "eventual"

    @pytest.mark.asyncio
    async def test_error_status_raises_upstream_error(self):
        """Verify Graph error payloads become UpstreamApiError with the status."""
        body = {
            "error": {
                "code": "Authorization_RequestDenied",
                "message": "Insufficient privileges to complete the operation.",
            }
        }
        mock_client = create_mock_get_session(create_mock_response(403, body))
        client = GraphClient(GRAPH_BASE_URL, StubTokenProvider())

        with patch("aiohttp.ClientSession", mock_client):
            with pytest.raises(UpstreamApiError, match="Authorization_RequestDenied") as exc_info:
                await client.get("/users")

        assert exc_info.value.status == 403

    @pytest.mark.asyncio
    async def test_malformed_body_raises_upstream_error(self):
        """Verify a non-JSON success body is reported as malformed."""
        mock_response = create_mock_response(200)
        mock_response.json = AsyncMock(side_effect=ValueError("Expecting value"))
        mock_client = create_mock_get_session(mock_response)
        client = GraphClient(GRAPH_BASE_URL, StubTokenProvider())

        with patch("aiohttp.ClientSession", mock_client):
            with pytest.raises(UpstreamApiError, match="malformed"):
                await client.get("/me")

    @pytest.mark.asyncio
    async def test_network_error_raises_upstream_error(self):
        """Verify aiohttp errors are wrapped."""
        mock_client = MagicMock()
        mock_client.return_value.__aenter__ = AsyncMock(
            side_effect=aiohttp.ClientError("Network error")
        )
        mock_client.return_value.__aexit__ = AsyncMock(return_value=None)
        client = GraphClient(GRAPH_BASE_URL, StubTokenProvider())

        with patch("aiohttp.ClientSession", mock_client):
            with pytest.raises(UpstreamApiError, match="network error"):
                await client.get("/me")

    @pytest.mark.asyncio
    async def test_token_failure_propagates_without_http_call(self):
        """Verify AuthError from the provider is raised as-is."""
        provider = MagicMock(spec=TokenProvider)
        provider.get_access_token = AsyncMock(side_effect=AuthError("Failed to acquire access token: 401"))
        mock_client = MagicMock()
        client = GraphClient(GRAPH_BASE_URL, provider)

        with patch("aiohttp.ClientSession", mock_client):
            with pytest.raises(AuthError):
                await client.get("/me")

        mock_client.assert_not_called()
