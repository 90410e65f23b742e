"""
Directory tools: the signed-in profile and user search.
"""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from core.factory import Domain, MCPToolBase
from utils.formatters import format_list_response, format_success_response

USER_SELECT = "id,displayName,mail,userPrincipalName,jobTitle,department,officeLocation"


def _user_details(user: dict) -> dict:
    return {
        "Display Name": user.get("displayName"),
        "Email": user.get("mail") or user.get("userPrincipalName"),
        "Job Title": user.get("jobTitle"),
        "Department": user.get("department"),
        "Office Location": user.get("officeLocation"),
        "User ID": user.get("id"),
    }


class DirectoryService(MCPToolBase):
    """Profile and user search tools backed by /me and /users."""

    def __init__(self, context) -> None:
        super().__init__(Domain.DIRECTORY, context)

    def register_tools(self, mcp: FastMCP) -> None:
        graph = self.context.clients.standard

        @mcp.tool(name="get-profile", tags=self.tags)
        @self.graph_tool("retrieve user profile")
        async def get_profile() -> str:
            """Get the current user's profile information."""
            user = await graph.get("/me")
            return format_success_response(
                action="User Profile Information", details=_user_details(user)
            )

        @mcp.tool(name="search-users", tags=self.tags)
        @self.graph_tool("search users")
        async def search_users(
            query: Annotated[
                str,
                Field(min_length=3, description="Name or email fragment to search for"),
            ],
            count: Annotated[
                int, Field(ge=1, le=50, description="Maximum number of users to return")
            ] = 10,
        ) -> str:
            """Search the organization directory for users by name or email."""
            term = query.replace('"', "")
            result = await graph.get(
                "/users",
                params={
                    "$search": f'"displayName:{term}" OR "mail:{term}"',
                    "$top": count,
                    "$select": USER_SELECT,
                },
                headers={"ConsistencyLevel": "eventual"},
            )
            users = result.get("value") or []
            if not users:
                return f'No users found matching "{query}".'

            return format_list_response(
                heading=f'Found {len(users)} users matching "{query}":',
                item_label="User",
                items=[_user_details(user) for user in users],
            )

    @property
    def tool_count(self) -> int:
        return 2
