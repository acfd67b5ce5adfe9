import logging

import uvicorn

from app.core.app_factory import create_app
from app.core.config import settings

logger = logging.getLogger(__name__)

app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    logger.info(
        "Roblox Gamepass Proxy running on port %s",
        settings.app.port,
        extra={"event": "server.starting", "host": settings.app.host, "port": settings.app.port},
    )
    uvicorn.run(app, host=settings.app.host, port=settings.app.port, log_config=None)


if __name__ == "__main__":
    run()
