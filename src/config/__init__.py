"""
Configuration module for the Microsoft Graph MCP Server.
"""

from .settings import (
    DEFAULT_SCOPES,
    MCPServerConfig,
    get_mcp_config,
    reset_config,
)

__all__ = [
    "DEFAULT_SCOPES",
    "MCPServerConfig",
    "get_mcp_config",
    "reset_config",
]
