import uvicorn
from fastmcp import FastMCP

from messaging_nodes.config.logger import logging, setup_logging
from messaging_nodes.app.api.tool import create_app
from messaging_nodes.app.tool.registry import registry
from messaging_nodes.config.settings import settings
from messaging_nodes.app.tool.init_tools import init_tools, load_tool_configs

logger = logging.getLogger(__name__)


def init() -> FastMCP:
    """Build every configured tool before starting the server."""
    setup_logging()
    logger.info("Initializing tools...")
    init_tools(registry, load_tool_configs())
    logger.info("Tools initialized successfully.")
    return registry.mcp


if __name__ == "__main__":
    init()

    if settings.server_mode == "shim":
        uvicorn.run(
            create_app(registry),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
            access_log=True,
        )
    else:
        registry.run(host=settings.host, port=settings.port, transport="http")
