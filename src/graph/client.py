"""
Microsoft Graph HTTP clients.

A GraphClient is bound to one base URL and one TokenProvider. Each request
fetches a fresh token from the provider and opens its own aiohttp session,
so the client itself holds no connection or token state.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import aiohttp

from auth.credentials import Credentials
from auth.token_provider import TokenProvider, select_token_provider
from core.exceptions import UpstreamApiError

logger = logging.getLogger(__name__)

GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
GRAPH_BETA_URL = "https://graph.microsoft.com/beta"


def _graph_error_message(status: int, body: Any, fallback: str) -> str:
    """Build an error message from a Graph error payload, if there is one."""
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        error = body["error"]
        code = error.get("code", "unknown")
        message = error.get("message", "No description")
        return f"Graph API request failed ({status}): {code} - {message}"
    return f"Graph API request failed ({status}): {fallback}"


class GraphClient:
    """Thin async HTTP client for one Microsoft Graph endpoint version."""

    def __init__(self, base_url: str, token_provider: TokenProvider) -> None:
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider

    def url_for(self, path: str) -> str:
        if path.startswith("https://") or path.startswith("http://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> dict[str, Any]:
        """GET a Graph resource and return the decoded JSON body.

        Args:
            path: Resource path relative to the base URL (e.g. "/me").
            params: Optional OData query parameters.
            headers: Optional extra request headers.

        Returns:
            The JSON response as a dict.

        Raises:
            AuthError: If the token provider cannot produce a token.
            UpstreamApiError: On network failure, non-2xx status or a non-JSON body.
        """
        token = await self.token_provider.get_access_token()

        request_headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        if headers:
            request_headers.update(headers)

        query = {key: str(value) for key, value in (params or {}).items()}
        url = self.url_for(path)
        logger.debug(f"Graph GET {url}", extra={"params": query})

        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    url, headers=request_headers, params=query
                ) as resp:
                    if resp.status < 200 or resp.status >= 300:
                        error_text = await resp.text()
                        try:
                            body = await resp.json(content_type=None)
                        except ValueError:
                            body = None
                        message = _graph_error_message(resp.status, body, error_text)
                        logger.error(message, extra={"url": url})
                        raise UpstreamApiError(message, status=resp.status)

                    try:
                        payload = await resp.json(content_type=None)
                    except ValueError as e:
                        raise UpstreamApiError(
                            f"Graph API returned a malformed response: {e}",
                            status=resp.status,
                        ) from e
        except aiohttp.ClientError as e:
            logger.error(f"Network error calling Graph API: {e}", extra={"url": url})
            raise UpstreamApiError(f"Graph API network error: {e}") from e

        if not isinstance(payload, dict):
            raise UpstreamApiError(
                "Graph API returned a malformed response: expected a JSON object",
                status=resp.status,
            )
        return payload


@dataclass(frozen=True)
class GraphClients:
    """The standard (v1.0) and beta clients sharing one token provider."""

    standard: GraphClient
    beta: GraphClient
    token_provider: TokenProvider


def build_clients(credentials: Credentials) -> GraphClients:
    """Build the v1.0 and beta Graph clients for a credential set.

    The token provider variant is selected once here and shared by both
    clients for the life of the process.

    Args:
        credentials: Resolved credentials.

    Returns:
        GraphClients bundle.
    """
    token_provider = select_token_provider(credentials)
    clients = GraphClients(
        standard=GraphClient(GRAPH_BASE_URL, token_provider),
        beta=GraphClient(GRAPH_BETA_URL, token_provider),
        token_provider=token_provider,
    )
    logger.info(
        "MS Graph clients initialized",
        extra={"provider": type(token_provider).__name__},
    )
    return clients
