"""
Utilities module for the Microsoft Graph MCP Server.
"""

from .auth_utils import (
    describe_access_token,
    get_token_claims,
    get_token_claims_safe,
)
from .date_utils import (
    format_date_for_user,
    get_current_timestamp,
    parse_graph_datetime,
    to_graph_datetime,
)
from .formatters import (
    format_error_response,
    format_fields,
    format_list_response,
    format_success_response,
    format_value,
)
from .logging_utils import BestEffortFileHandler, configure_logging

__all__ = [
    "describe_access_token",
    "get_token_claims",
    "get_token_claims_safe",
    "format_date_for_user",
    "get_current_timestamp",
    "parse_graph_datetime",
    "to_graph_datetime",
    "format_error_response",
    "format_fields",
    "format_list_response",
    "format_success_response",
    "format_value",
    "BestEffortFileHandler",
    "configure_logging",
]
