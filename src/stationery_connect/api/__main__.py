"""
stationery_connect.api.__main__

Entrypoint for running the service via `python -m stationery_connect.api`
(or the `stationery-connect` console script).
"""

from __future__ import annotations

import uvicorn

from stationery_connect.api.app import create_app
from stationery_connect.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
        log_config=None,  # structlog owns logging
    )


if __name__ == "__main__":
    main()
