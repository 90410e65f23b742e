"""
General purpose MCP tools service.

Provides check-auth, which reports whether real Graph credentials are
configured and, if so, whether a token can actually be acquired.
"""

from fastmcp import FastMCP

from core.factory import Domain, MCPToolBase
from utils.auth_utils import describe_access_token
from utils.date_utils import get_current_timestamp
from utils.formatters import format_success_response

SETUP_INSTRUCTIONS = """To use Microsoft Graph, you need to set up authentication:

1. Create a .env file in the working directory with:
   TENANT_ID=your-tenant-id
   CLIENT_ID=your-client-id
   CLIENT_SECRET=your-client-secret
   SCOPES=.default

2. Get these values from the Azure Portal:
   - Register an app in Microsoft Entra ID
   - Note the Application (client) ID and Directory (tenant) ID
   - Create a client secret
   - Grant the application permissions the tools need
     (User.Read.All, Mail.Read, Calendars.Read, Presence.Read.All, Team.ReadBasic.All)"""


class GeneralService(MCPToolBase):
    """General purpose tools for setup and diagnostics."""

    def __init__(self, context) -> None:
        """Initialize the general service."""
        super().__init__(Domain.GENERAL, context)

    def register_tools(self, mcp: FastMCP) -> None:
        """Register general tools with the MCP server.

        Args:
            mcp: The FastMCP server instance to register tools with.
        """

        @mcp.tool(name="check-auth", tags=self.tags)
        @self.graph_tool("verify authentication", requires_graph=False)
        async def check_auth() -> str:
            """Check authentication status and get setup help."""
            if self.context.is_demo:
                return f"Authentication Status: Not Configured\n\n{SETUP_INSTRUCTIONS}"

            token = await self.context.clients.token_provider.get_access_token()

            details = {
                "Tenant ID": self.context.credentials.tenant_id,
                "Client ID": self.context.credentials.client_id,
                "Requested Scopes": list(self.context.credentials.scopes),
                "Checked At": get_current_timestamp(),
            }
            details.update(describe_access_token(token))

            return format_success_response(
                action="Authentication Status: Configured",
                details=details,
                summary="Authentication is properly configured. All Graph API features should be available.",
            )

    @property
    def tool_count(self) -> int:
        """Return the number of tools provided by this service.

        Returns:
            The number of tools (1: check-auth).
        """
        return 1
