from __future__ import annotations

import logging

import uvicorn

from .logging_setup import setup_logging
from .main import create_app
from .settings import get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def main() -> None:
    """
    Run the API with uvicorn.

    uvicorn stops accepting connections and drains in-flight requests on
    SIGTERM/SIGINT before the application's lifespan closes the pool.
    """
    settings = get_settings()
    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server is running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
