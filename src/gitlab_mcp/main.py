"""Entry point for the GitLab MCP server (stdio transport)."""

import asyncio
import logging
import sys

from .client.gitlab import GitLabClient
from .config import Settings, load_settings
from .observability.logging import configure_logging
from .server import create_server, serve_stdio

logger = logging.getLogger(__name__)


async def run_server(settings: Settings):
    """Build the client and server, then serve until stdin closes."""
    async with GitLabClient.from_settings(settings) as client:
        server = create_server(client, settings)
        logger.info(
            "GitLab MCP Server running on stdio (api_base=%s)", settings.api_base
        )
        await serve_stdio(server)


def main():
    # Exits with status 1 and a per-field report when configuration is invalid
    settings = load_settings()

    configure_logging(
        environment=settings.environment,
        log_level=settings.log_level,
    )

    try:
        asyncio.run(run_server(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
