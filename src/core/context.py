"""
Application context shared by all tool services.

Built once at startup and read-only afterwards.
"""

from dataclasses import dataclass

from auth.credentials import CredentialKind, Credentials, resolve_credentials
from config.settings import MCPServerConfig
from graph.client import GraphClients, build_clients


@dataclass(frozen=True)
class AppContext:
    """Configuration, resolved credentials and Graph clients for one process."""

    config: MCPServerConfig
    credentials: Credentials
    clients: GraphClients

    @property
    def is_demo(self) -> bool:
        return self.credentials.kind is CredentialKind.DEMO


def create_app_context(config: MCPServerConfig) -> AppContext:
    """Resolve credentials and build the Graph clients.

    Args:
        config: The MCP server configuration.

    Returns:
        The application context.

    Raises:
        ConfigurationError: If credentials are missing in strict mode.
    """
    credentials = resolve_credentials(config)
    return AppContext(
        config=config,
        credentials=credentials,
        clients=build_clients(credentials),
    )
