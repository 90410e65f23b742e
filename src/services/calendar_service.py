"""
Calendar tools.
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from core.factory import Domain, MCPToolBase
from utils.date_utils import format_date_for_user, to_graph_datetime
from utils.formatters import format_list_response


def _event_details(event: dict) -> dict:
    start = event.get("start") or {}
    end = event.get("end") or {}
    organizer = (event.get("organizer") or {}).get("emailAddress") or {}
    return {
        "Subject": event.get("subject"),
        "Start": format_date_for_user(start.get("dateTime"), start.get("timeZone")),
        "End": format_date_for_user(end.get("dateTime"), end.get("timeZone")),
        "Location": (event.get("location") or {}).get("displayName"),
        "Organizer": organizer.get("name") or organizer.get("address"),
    }


class CalendarService(MCPToolBase):
    """Calendar tools backed by /me/calendarView."""

    def __init__(self, context) -> None:
        super().__init__(Domain.CALENDAR, context)

    def register_tools(self, mcp: FastMCP) -> None:
        graph = self.context.clients.standard

        @mcp.tool(name="get-calendar-events", tags=self.tags)
        @self.graph_tool("retrieve calendar events")
        async def get_calendar_events(
            days: Annotated[
                int, Field(ge=1, le=30, description="Number of days ahead to look")
            ] = 7,
            count: Annotated[
                int, Field(ge=1, le=50, description="Maximum number of events")
            ] = 10,
        ) -> str:
            """Get upcoming events from the user's calendar."""
            start = datetime.now(timezone.utc)
            end = start + timedelta(days=days)

            result = await graph.get(
                "/me/calendarView",
                params={
                    "startDateTime": to_graph_datetime(start),
                    "endDateTime": to_graph_datetime(end),
                    "$top": count,
                    "$orderby": "start/dateTime",
                    "$select": "subject,start,end,location,organizer",
                },
            )
            events = result.get("value") or []
            if not events:
                return f"No calendar events found in the next {days} days."

            return format_list_response(
                heading=f"Upcoming events in the next {days} days:",
                item_label="Event",
                items=[_event_details(event) for event in events],
            )

    @property
    def tool_count(self) -> int:
        return 1
