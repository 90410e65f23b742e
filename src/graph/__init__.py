"""
Microsoft Graph client module.
"""

from .client import (
    GRAPH_BASE_URL,
    GRAPH_BETA_URL,
    GraphClient,
    GraphClients,
    build_clients,
)

__all__ = [
    "GRAPH_BASE_URL",
    "GRAPH_BETA_URL",
    "GraphClient",
    "GraphClients",
    "build_clients",
]
