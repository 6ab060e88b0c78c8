"""
The main entry point for the VFS Tools MCP server.

Loads the environment, configures logging, verifies that every tool command
is routable and then hands control to FastMCP.
"""

import logging
import os
import sys

from dotenv import load_dotenv


def setup_environment() -> bool:
    """
    Loads environment variables and configures application-wide logging.
    It's expected that the correct .env file is loaded by the process runner (e.g., uv).
    """
    load_dotenv()  # Load environment variables from .env file.

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if log_level not in logging.getLevelNamesMapping():
        print(f"Unknown LOG_LEVEL '{log_level}'", file=sys.stderr)
        return False

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return True


def check_dispatch_table() -> bool:
    """Build the dispatcher up front so a tool with unhandled commands fails at startup, not on first use."""
    from .utils.dependencies import get_dispatcher

    logger = logging.getLogger(__name__)
    try:
        dispatcher = get_dispatcher()
    except ValueError as e:
        logger.critical(f"Tool registration failed: {e}")
        return False

    for tool_name, command in sorted(dispatcher.commands):
        logger.debug(f"Routing {tool_name}.{command}")
    logger.info(f"{len(dispatcher.commands)} tool commands registered")
    return True


def run_server() -> None:
    """
    Sets up the environment and runs the MCP server.
    """
    if not setup_environment() or not check_dispatch_table():
        logging.critical("Initial environment setup failed. Exiting.")
        sys.exit(1)

    # Import server components after setup to ensure environment is loaded first.
    from .server import mcp_app, server_config

    logger = logging.getLogger(__name__)
    logger.info("--- VFS Tools MCP Server ---")
    logger.info("Starting server with transport: %s", server_config.MCP_TRANSPORT)
    if server_config.MCP_TRANSPORT != "stdio":
        logger.info(
            "Server will listen on: %s:%s",
            server_config.MCP_HOST,
            server_config.MCP_PORT,
        )

    mcp_app.run(transport=server_config.MCP_TRANSPORT)


if __name__ == "__main__":
    run_server()
