"""
Microsoft Graph MCP Server - exposes Microsoft Graph resources as MCP tools.

Profile, mail, calendar, directory search, presence and Teams data are
served over stdio (or streamable-http) using an app registration's
client-credentials flow, with a demo mode for running without credentials.
"""

__version__ = "0.1.0"
