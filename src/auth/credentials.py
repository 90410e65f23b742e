"""
Credential resolution for the Microsoft Graph client-credentials flow.

Resolves tenant/client identifiers and the client secret from configuration
and classifies the result as real or demo. The classification is the single
discriminator used to pick a token provider.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from config.settings import MCPServerConfig
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEMO_MARKER = "demo"

DEMO_TENANT_ID = "demo-tenant-id"
DEMO_CLIENT_ID = "demo-client-id"
DEMO_CLIENT_SECRET = "demo-client-secret"


class CredentialKind(Enum):
    """Classification of a credential set."""

    REAL = "real"
    DEMO = "demo"


@dataclass(frozen=True)
class Credentials:
    """App registration credentials plus the scopes to request."""

    tenant_id: str
    client_id: str
    client_secret: str
    scopes: tuple[str, ...]

    @property
    def kind(self) -> CredentialKind:
        return is_placeholder_credential(self)

    def __repr__(self) -> str:
        return (
            f"Credentials(tenant_id={self.tenant_id!r}, client_id={self.client_id!r}, "
            f"client_secret='***', scopes={self.scopes!r})"
        )


def is_placeholder_credential(credentials: Credentials) -> CredentialKind:
    """Classify a credential set.

    A set is DEMO when any identifier contains the substring "demo"
    (case-sensitive), regardless of where the values came from.

    Args:
        credentials: The credential set to classify.

    Returns:
        CredentialKind.DEMO or CredentialKind.REAL.
    """
    identifiers = (
        credentials.tenant_id,
        credentials.client_id,
        credentials.client_secret,
    )
    if any(DEMO_MARKER in value for value in identifiers):
        return CredentialKind.DEMO
    return CredentialKind.REAL


def resolve_credentials(config: MCPServerConfig) -> Credentials:
    """Resolve credentials from the environment-backed configuration.

    Strict mode (default) refuses to start without all three identifiers.
    With ``allow_demo_credentials`` enabled, missing identifiers are replaced
    by demo placeholders so the server can start without directory access.

    Args:
        config: The MCP server configuration.

    Returns:
        The resolved Credentials.

    Raises:
        ConfigurationError: If identifiers are missing in strict mode.
    """
    client_secret = (
        config.client_secret.get_secret_value() if config.client_secret else ""
    )
    values = {
        "TENANT_ID": config.tenant_id or "",
        "CLIENT_ID": config.client_id or "",
        "CLIENT_SECRET": client_secret,
    }
    missing = [name for name, value in values.items() if not value]

    if missing and not config.allow_demo_credentials:
        logger.error(
            "Required credentials missing", extra={"missing_config": missing}
        )
        raise ConfigurationError(
            f"Missing required environment variables for authentication: {', '.join(missing)}"
        )

    if missing:
        logger.warning(
            "Using demo credentials - Graph API functionality will be limited",
            extra={"missing_config": missing},
        )

    credentials = Credentials(
        tenant_id=values["TENANT_ID"] or DEMO_TENANT_ID,
        client_id=values["CLIENT_ID"] or DEMO_CLIENT_ID,
        client_secret=values["CLIENT_SECRET"] or DEMO_CLIENT_SECRET,
        scopes=tuple(config.scope_list()),
    )

    logger.info(
        "Credentials resolved",
        extra={
            "tenant_id": credentials.tenant_id,
            "client_id": credentials.client_id,
            "kind": credentials.kind.value,
            "scopes": list(credentials.scopes),
        },
    )
    return credentials
