"""
Mail tools.
"""

from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from core.factory import Domain, MCPToolBase
from utils.date_utils import format_date_for_user
from utils.formatters import format_list_response


def _sender(message: dict) -> str | None:
    address = (message.get("from") or {}).get("emailAddress") or {}
    return address.get("name") or address.get("address")


class MailService(MCPToolBase):
    """Inbox tools backed by /me/messages."""

    def __init__(self, context) -> None:
        super().__init__(Domain.MAIL, context)

    def register_tools(self, mcp: FastMCP) -> None:
        graph = self.context.clients.standard

        @mcp.tool(name="get-emails", tags=self.tags)
        @self.graph_tool("retrieve emails")
        async def get_emails(
            count: Annotated[
                int, Field(ge=1, le=50, description="Number of emails to retrieve")
            ] = 10,
        ) -> str:
            """Get recent emails from the user's inbox."""
            result = await graph.get(
                "/me/messages",
                params={
                    "$top": count,
                    "$orderby": "receivedDateTime DESC",
                    "$select": "subject,from,receivedDateTime,bodyPreview",
                },
            )
            messages = result.get("value") or []
            if not messages:
                return "No emails found in the inbox."

            return format_list_response(
                heading=f"Recent {len(messages)} emails:",
                item_label="Email",
                items=[
                    {
                        "From": _sender(message),
                        "Date": format_date_for_user(message.get("receivedDateTime")),
                        "Subject": message.get("subject"),
                        "Preview": message.get("bodyPreview"),
                    }
                    for message in messages
                ],
            )

    @property
    def tool_count(self) -> int:
        return 1
