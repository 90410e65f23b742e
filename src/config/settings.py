"""
Configuration settings for the Microsoft Graph MCP Server.

Values are read from environment variables (and an optional ``.env`` file)
through pydantic-settings. Field names map to upper-case variables, e.g.
``tenant_id`` -> ``TENANT_ID``.
"""

from typing import Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCOPES = "User.Read"


class MCPServerConfig(BaseSettings):
    """Microsoft Graph MCP Server configuration.

    Groups:
    - Server settings (name, transport, host, port, debug, log file)
    - App registration credentials for the client-credentials flow
    - Credential policy (strict, or demo placeholders when unset)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra environment variables
    )

    # Server settings
    server_name: str = Field(default="msgraph", description="Server name")
    transport: Literal["stdio", "streamable-http"] = Field(
        default="stdio", description="MCP transport to serve"
    )
    host: str = Field(
        default="127.0.0.1", description="Host to bind to (streamable-http only)"
    )
    port: int = Field(
        default=9000, description="Port to bind to (streamable-http only)"
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_file: Optional[str] = Field(
        default="graph-server.log",
        description="Append-only log file. Empty disables the file sink.",
    )

    # App registration (client credentials)
    tenant_id: Optional[str] = Field(default=None, description="Azure AD tenant ID")
    client_id: Optional[str] = Field(
        default=None, description="Application (client) ID"
    )
    client_secret: Optional[SecretStr] = Field(
        default=None, description="Client secret for the client-credentials grant"
    )
    scopes: str = Field(
        default=DEFAULT_SCOPES,
        description="Comma-separated Microsoft Graph scopes to request",
    )

    # Credential policy
    allow_demo_credentials: bool = Field(
        default=False,
        description="Substitute demo placeholders for missing credentials instead of failing",
    )

    def scope_list(self) -> list[str]:
        """Return the configured scopes, trimmed and without empty entries."""
        scopes = [scope.strip() for scope in self.scopes.split(",")]
        return [scope for scope in scopes if scope] or [DEFAULT_SCOPES]


# Global configuration instance - lazy initialized
_mcp_config: MCPServerConfig | None = None


def get_mcp_config(config: MCPServerConfig | None = None) -> MCPServerConfig:
    """Get the global MCP server configuration with optional injection.

    Args:
        config: Optional config instance to inject (useful for testing).
                If provided, sets this as the global config.

    Returns:
        The global MCPServerConfig instance.
    """
    global _mcp_config
    if config is not None:
        _mcp_config = config
    if _mcp_config is None:
        _mcp_config = MCPServerConfig()
    return _mcp_config


def reset_config() -> None:
    """Reset the config singleton for testing.

    This clears the cached config instance, allowing a fresh config
    to be created on the next call to get_mcp_config().
    """
    global _mcp_config
    _mcp_config = None
