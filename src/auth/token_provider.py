"""
Access token providers for Microsoft Graph.

Two variants behind one interface:
1. RealTokenProvider - OAuth 2.0 client-credentials grant via azure-identity.
2. MockTokenProvider - constant placeholder token for demo credentials.

The variant is chosen once by select_token_provider() and never switched.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from azure.identity.aio import ClientSecretCredential

from auth.credentials import CredentialKind, Credentials
from core.exceptions import AuthError, ConfigurationError

logger = logging.getLogger(__name__)

DEMO_TOKEN = "demo-token"

GRAPH_RESOURCE = "https://graph.microsoft.com"


def to_graph_scope(scope: str) -> str:
    """Qualify a bare Graph permission name with the Graph resource URI.

    Args:
        scope: e.g. "User.Read", ".default" or a fully qualified scope.

    Returns:
        The scope as expected by the token endpoint.
    """
    if "://" in scope:
        return scope
    return f"{GRAPH_RESOURCE}/{scope}"


class TokenProvider(ABC):
    """Produces bearer tokens on demand."""

    @abstractmethod
    async def get_access_token(self) -> str:
        """Return a bearer token.

        Raises:
            AuthError: If the token cannot be obtained.
        """
        pass


class RealTokenProvider(TokenProvider):
    """Client-credentials token provider backed by ClientSecretCredential.

    Every call asks the credential for a token. azure-identity may serve it
    from its own cache; this class keeps no token state and never retries.
    """

    def __init__(self, credentials: Credentials) -> None:
        self.credentials = credentials
        self.scopes = [to_graph_scope(scope) for scope in credentials.scopes]
        try:
            self._credential = ClientSecretCredential(
                tenant_id=credentials.tenant_id,
                client_id=credentials.client_id,
                client_secret=credentials.client_secret,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid credentials: {e}") from e

    async def get_access_token(self) -> str:
        start_time = datetime.now(timezone.utc)
        try:
            access_token = await self._credential.get_token(*self.scopes)
        except Exception as e:
            latency_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
            logger.error(
                f"Error getting access token (latency: {latency_ms:.0f}ms): {e}"
            )
            raise AuthError(f"Failed to acquire access token: {e}") from e

        latency_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
        logger.debug(f"Access token acquired (latency: {latency_ms:.0f}ms)")
        return access_token.token


class MockTokenProvider(TokenProvider):
    """Returns DEMO_TOKEN unconditionally. Used only with demo credentials."""

    async def get_access_token(self) -> str:
        return DEMO_TOKEN


def select_token_provider(credentials: Credentials) -> TokenProvider:
    """Pick the token provider variant for a credential set.

    Args:
        credentials: Resolved credentials.

    Returns:
        MockTokenProvider for demo credentials, RealTokenProvider otherwise.
    """
    if credentials.kind is CredentialKind.DEMO:
        logger.info("Demo credentials detected, using mock token provider")
        return MockTokenProvider()
    return RealTokenProvider(credentials)
