"""Run the FastAPI server using env-based configuration.

This script reads (see `stopdesk.config`):
- `STOPDESK_API_HOST` (default: 0.0.0.0)
- `STOPDESK_API_PORT` (default: 8000)
- `STOPDESK_LOG_LEVEL` (default: INFO)

It then starts Uvicorn with the already-configured `app`.

Usage
-----
python examples/api_server_fastapi/run.py
"""

from __future__ import annotations

import logging

import uvicorn

from stopdesk.api import create_app
from stopdesk.config import Settings


if __name__ == "__main__":
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
