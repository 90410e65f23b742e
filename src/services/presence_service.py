"""
Presence tools. Served from the beta endpoint.
"""

from typing import Annotated, Optional
from urllib.parse import quote

from fastmcp import FastMCP
from pydantic import Field

from core.factory import Domain, MCPToolBase
from utils.formatters import format_success_response


class PresenceService(MCPToolBase):
    """Teams presence lookup for the signed-in user or any user."""

    def __init__(self, context) -> None:
        super().__init__(Domain.PRESENCE, context)

    def register_tools(self, mcp: FastMCP) -> None:
        graph = self.context.clients.beta

        @mcp.tool(name="get-presence", tags=self.tags)
        @self.graph_tool("retrieve presence")
        async def get_presence(
            user_id: Annotated[
                Optional[str],
                Field(
                    description="User ID or user principal name. Omit for the current user."
                ),
            ] = None,
        ) -> str:
            """Get the Teams presence (availability and activity) of a user."""
            if user_id:
                path = f"/users/{quote(user_id, safe='@')}/presence"
                subject = user_id
            else:
                path = "/me/presence"
                subject = "current user"

            presence = await graph.get(path)
            return format_success_response(
                action=f"Presence for {subject}",
                details={
                    "Availability": presence.get("availability"),
                    "Activity": presence.get("activity"),
                    "User ID": presence.get("id"),
                },
            )

    @property
    def tool_count(self) -> int:
        return 1
