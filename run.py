"""Entry point for the Flights API.

Launches the FastAPI application with Uvicorn.  Host, port and log
level come from ``flights_api.app.core.config.settings``, i.e. from
the ``HOST``, ``PORT`` and ``LOG_LEVEL`` environment variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from flights_api.app.core.config import settings
from flights_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    logging.getLogger(__name__).info("Starting %s on %s:%s", settings.project_name, settings.host, settings.port)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
