"""Entry point for serving the Artist Roster API.

Host and port come from the ``HOST`` and ``PORT`` environment variables
(defaults ``0.0.0.0`` and ``5000``); see ``artist_roster_api/app/core/config.py``
for the other settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from artist_roster_api.app.core.config import settings
from artist_roster_api.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        proxy_headers=True,
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
