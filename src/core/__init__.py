"""
Core module for MCP server components and factory patterns.
"""

from .exceptions import (
    AuthError,
    ConfigurationError,
    MCPServerError,
    ServiceRegistrationError,
    UpstreamApiError,
)
from .factory import Domain, MCPToolBase, MCPToolFactory

__all__ = [
    "Domain",
    "MCPToolBase",
    "MCPToolFactory",
    "MCPServerError",
    "ConfigurationError",
    "AuthError",
    "UpstreamApiError",
    "ServiceRegistrationError",
]
