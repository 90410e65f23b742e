"""
Microsoft Teams tools: joined teams and their channels.
"""

from typing import Annotated
from urllib.parse import quote

from fastmcp import FastMCP
from pydantic import Field

from core.factory import Domain, MCPToolBase
from utils.formatters import format_list_response


class TeamsService(MCPToolBase):
    """Teams tools backed by /me/joinedTeams and /teams/{id}/channels."""

    def __init__(self, context) -> None:
        super().__init__(Domain.TEAMS, context)

    def register_tools(self, mcp: FastMCP) -> None:
        graph = self.context.clients.standard

        @mcp.tool(name="list-teams", tags=self.tags)
        @self.graph_tool("retrieve teams")
        async def list_teams() -> str:
            """List the Microsoft Teams the current user is a member of."""
            result = await graph.get("/me/joinedTeams")
            teams = result.get("value") or []
            if not teams:
                return "No teams found."

            return format_list_response(
                heading=f"Joined teams ({len(teams)}):",
                item_label="Team",
                items=[
                    {
                        "Name": team.get("displayName"),
                        "Description": team.get("description"),
                        "Team ID": team.get("id"),
                    }
                    for team in teams
                ],
            )

        @mcp.tool(name="list-team-channels", tags=self.tags)
        @self.graph_tool("retrieve team channels")
        async def list_team_channels(
            team_id: Annotated[
                str, Field(min_length=1, description="ID of the team (see list-teams)")
            ],
        ) -> str:
            """List the channels of a Microsoft Team."""
            result = await graph.get(f"/teams/{quote(team_id, safe='')}/channels")
            channels = result.get("value") or []
            if not channels:
                return f"No channels found for team {team_id}."

            return format_list_response(
                heading=f"Channels in team {team_id} ({len(channels)}):",
                item_label="Channel",
                items=[
                    {
                        "Name": channel.get("displayName"),
                        "Description": channel.get("description"),
                        "Membership": channel.get("membershipType"),
                        "Channel ID": channel.get("id"),
                    }
                    for channel in channels
                ],
            )

    @property
    def tool_count(self) -> int:
        return 2
