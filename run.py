"""Entry point for serving the Trip Planner API with Uvicorn.

Host and port are read from the environment variables ``API_HOST`` and
``API_PORT`` (defaults ``0.0.0.0`` and ``8000``).  Other configuration
(``DATABASE_URL``, ``SECRET_KEY``, ``GOOGLE_CALENDAR_TOKEN``...) is read
by ``trip_planner_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from trip_planner_api.app.main import app


async def main() -> None:
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    logging.getLogger(__name__).info("Serving Trip Planner API on %s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
