"""
Shared handler wrapper applied to every MCP tool.

Argument validation happens in FastMCP before the wrapper runs, so schema
violations still surface as request-level errors. Everything that goes wrong
inside a handler is turned into ordinary text content.
"""

import functools
import logging
from typing import Awaitable, Callable, TYPE_CHECKING

from utils.formatters import format_error_response

if TYPE_CHECKING:
    from core.context import AppContext

logger = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = (
    "Authentication configuration is required to use this feature. "
    "Please set up TENANT_ID, CLIENT_ID, and CLIENT_SECRET environment variables."
)

ToolHandler = Callable[..., Awaitable[str]]


def graph_tool(
    context: "AppContext", action: str, requires_graph: bool = True
) -> Callable[[ToolHandler], ToolHandler]:
    """Wrap a tool handler so it always returns text.

    Args:
        context: The application context.
        action: Verb phrase used in error text, e.g. "retrieve emails".
        requires_graph: Short-circuit with AUTH_REQUIRED_MESSAGE on demo
            credentials instead of calling the handler.

    Returns:
        A decorator for async handlers returning str.
    """

    def decorator(handler: ToolHandler) -> ToolHandler:
        @functools.wraps(handler)
        async def wrapper(*args, **kwargs) -> str:
            logger.info(f"Tool called: {handler.__name__}", extra={"arguments": kwargs})

            if requires_graph and context.is_demo:
                logger.info(
                    f"Tool {handler.__name__} skipped: demo credentials in use"
                )
                return AUTH_REQUIRED_MESSAGE

            try:
                return await handler(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error while trying to {action}: {e}")
                return format_error_response(error_message=str(e), context=action)

        return wrapper

    return decorator
