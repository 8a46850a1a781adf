"""Run the todo service with uvicorn.

Usage:
    python -m todo_service
    PORT=8080 TODO_SERVICE_ENV=production todo-service
"""

import logging

import uvicorn

from todo_service.config import load_settings
from todo_service.fastapi.app import create_app
from todo_service.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)

    app = create_app(settings=settings)

    logger.info(
        "Starting server",
        extra={"host": settings.host, "port": settings.port, "environment": settings.environment},
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
