"""Command-line entry point: ``python -m sim_mcp`` or ``sim-mcp-server``."""

from __future__ import annotations

import asyncio
import logging
import sys

import uvicorn

from sim_mcp.config import default_config
from sim_mcp.server import app

logger = logging.getLogger("sim_mcp")


def _log_uncaught(exc_type, exc, tb) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.error("Uncaught exception", exc_info=(exc_type, exc, tb))


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    exc = context.get("exception")
    logger.error(
        "Unhandled exception in event loop: %s",
        context.get("message"),
        exc_info=(type(exc), exc, exc.__traceback__) if exc else None,
    )


def install_process_hooks(loop: asyncio.AbstractEventLoop | None = None) -> None:
    """Log uncaught exceptions instead of letting them take the process down."""
    sys.excepthook = _log_uncaught
    if loop is not None:
        loop.set_exception_handler(_log_loop_exception)


async def _serve() -> None:
    install_process_hooks(asyncio.get_running_loop())
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=default_config.host,
            port=default_config.port,
            log_config=None,
        )
    )
    logger.info("Sim API MCP Server running on port %s", default_config.port)
    logger.info("MCP endpoint: http://localhost:%s/mcp", default_config.port)
    await server.serve()


def main() -> None:
    if not default_config.has_api_key:
        logger.warning("SIM_API_KEY is not set; every tool call will return a configuration error.")
    asyncio.run(_serve())


if __name__ == "__main__":
    main()
