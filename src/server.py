"""
Microsoft Graph MCP Server - FastMCP server exposing Graph resources as tools.

This module wires together:
- Credential resolution (strict, or demo placeholders with --demo)
- Token provider selection and the v1.0 / beta Graph clients
- Tool services for profile, mail, calendar, directory, presence and Teams
- stdio transport (default) or streamable-http with a health endpoint

Usage:
    # Serve over stdio (for desktop MCP clients)
    python server.py

    # Start without credentials; Graph tools answer with setup instructions
    python server.py --demo

    # Serve over HTTP with debug logging
    python server.py --transport streamable-http --port 9000 --debug
"""

import argparse
import logging
import sys
from typing import Any, Optional

from config.settings import MCPServerConfig, get_mcp_config
from core.context import AppContext, create_app_context
from core.exceptions import ConfigurationError
from core.factory import MCPToolBase, MCPToolFactory
from fastmcp import FastMCP
from services import (
    CalendarService,
    DirectoryService,
    GeneralService,
    MailService,
    PresenceService,
    TeamsService,
)
from starlette.requests import Request
from starlette.responses import JSONResponse
from utils.logging_utils import configure_logging

# Setup logging - will be reconfigured based on config
logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


# =============================================================================
# Service Registration
# =============================================================================


def get_default_services(context: AppContext) -> list[MCPToolBase]:
    """Return default service instances bound to the application context.

    Args:
        context: The application context.

    Returns:
        List of tool services.
    """
    return [
        GeneralService(context),
        DirectoryService(context),
        MailService(context),
        CalendarService(context),
        PresenceService(context),
        TeamsService(context),
    ]


def create_factory(
    context: AppContext, services: Optional[list[MCPToolBase]] = None
) -> MCPToolFactory:
    """Create factory with services.

    Args:
        context: The application context.
        services: Optional list of services to register. If None, uses defaults.

    Returns:
        Configured MCPToolFactory instance.
    """
    factory = MCPToolFactory()
    for service in services or get_default_services(context):
        factory.register_service(service)
    return factory


# =============================================================================
# Endpoint Registration
# =============================================================================


def register_health_endpoint(mcp_server: FastMCP, context: AppContext) -> None:
    """Register health check endpoint for the streamable-http transport.

    Args:
        mcp_server: The FastMCP server instance.
        context: The application context.
    """

    @mcp_server.custom_route("/health", methods=["GET"], name="health_check")
    async def health_check(request: Request) -> JSONResponse:
        """Simple health check endpoint."""
        return JSONResponse(
            content={
                "status": "healthy",
                "service": context.config.server_name,
                "credentials": context.credentials.kind.value,
            },
            headers={"Content-Type": "application/json"},
        )

    logger.info("Health check endpoint registered at /health")


# =============================================================================
# Server Initialization
# =============================================================================


def create_fastmcp_server(
    config: Optional[MCPServerConfig] = None,
    services: Optional[list[MCPToolBase]] = None,
) -> FastMCP:
    """Create and configure FastMCP server.

    Args:
        config: Optional config instance. If None, uses global config.
        services: Optional list of services. If None, uses defaults.

    Returns:
        Configured FastMCP server instance.

    Raises:
        ConfigurationError: If credentials are missing in strict mode.
    """
    config = config or get_mcp_config()

    log_level = logging.DEBUG if config.debug else logging.INFO
    logging.getLogger().setLevel(log_level)

    context = create_app_context(config)

    factory = create_factory(context, services)
    mcp_server = factory.create_mcp_server(name=config.server_name)

    if config.transport == "streamable-http":
        register_health_endpoint(mcp_server, context)

    summary = factory.get_tool_summary()
    logger.info(
        "Server initialized",
        extra={
            "server_name": config.server_name,
            "total_services": summary["total_services"],
            "total_tools": summary["total_tools"],
            "credentials": context.credentials.kind.value,
        },
    )
    for domain, info in summary["services"].items():
        logger.info(
            f"Service registered: {domain}",
            extra={"tool_count": info["tool_count"], "class_name": info["class_name"]},
        )

    return mcp_server


# =============================================================================
# Server Runtime
# =============================================================================


def run_server(server_instance: FastMCP, config: MCPServerConfig, **kwargs: Any) -> None:
    """Run the FastMCP server on the configured transport.

    Args:
        server_instance: The FastMCP server to run.
        config: The MCP server configuration.
        **kwargs: Additional arguments passed to server.run().
    """
    logger.info(
        "Starting FastMCP server",
        extra={"transport": config.transport, "host": config.host, "port": config.port},
    )
    if config.transport == "stdio":
        server_instance.run(transport="stdio", **kwargs)
    else:
        server_instance.run(
            transport=config.transport,
            host=config.host,
            port=config.port,
            log_level="debug" if config.debug else "info",
            **kwargs,
        )


# =============================================================================
# CLI Entry Point
# =============================================================================


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Microsoft Graph MCP Server")
    parser.add_argument(
        "--transport",
        "-t",
        choices=["stdio", "streamable-http"],
        default=None,
        help="Transport protocol (default: stdio)",
    )
    parser.add_argument("--host", default=None, help="Host to bind to (streamable-http)")
    parser.add_argument(
        "--port", "-p", type=int, default=None, help="Port to bind to (streamable-http)"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Start with demo placeholders when credentials are missing",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> MCPServerConfig:
    """Apply CLI overrides on top of the environment configuration."""
    overrides: dict[str, Any] = {}
    if args.transport:
        overrides["transport"] = args.transport
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.debug:
        overrides["debug"] = True
    if args.demo:
        overrides["allow_demo_credentials"] = True

    base_config = get_mcp_config()
    if overrides:
        return base_config.model_copy(update=overrides)
    return base_config


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point with argument parsing.

    Returns:
        Process exit code: 0 on graceful shutdown, 1 on a fatal startup
        or transport error.
    """
    args = build_arg_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    configure_logging(debug=config.debug, log_file=config.log_file)
    logger.info("Initializing MCP server")

    try:
        server = create_fastmcp_server(config=config)
    except ConfigurationError as e:
        logger.error(f"Fatal error during setup: {e}")
        return 1

    try:
        run_server(server, config)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except Exception as e:
        logger.error(f"Fatal error running server: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
