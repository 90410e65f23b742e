"""
Custom exception hierarchy for the Microsoft Graph MCP server.

Startup failures (configuration, dependencies) are fatal. Per-call failures
(token acquisition, Graph API errors) are rendered as tool text by the
dispatcher and never terminate the session.
"""

from typing import Optional


class MCPServerError(Exception):
    """
    Base exception for all MCP server errors.

    All custom exceptions in the MCP server should inherit from this class
    to allow catching all MCP-related errors with a single except clause.
    """

    pass


class ConfigurationError(MCPServerError):
    """
    Configuration validation failed.

    Raised at startup when required configuration values are missing or invalid.
    Examples:
    - Missing TENANT_ID, CLIENT_ID or CLIENT_SECRET in strict mode
    - No usable scopes after parsing SCOPES
    """

    pass


class AuthError(MCPServerError):
    """
    Access token acquisition failed.

    Raised by a token provider when the OAuth client-credentials exchange
    fails (network error, invalid or revoked secret, throttling).
    """

    pass


class UpstreamApiError(MCPServerError):
    """
    Microsoft Graph returned a non-2xx status or an unreadable body.

    Attributes:
        status: HTTP status code, or None for network / decoding failures.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class ServiceRegistrationError(MCPServerError):
    """
    Service registration failed.

    Raised when a service cannot be registered with the factory.
    Examples:
    - Duplicate service domain
    """

    pass

