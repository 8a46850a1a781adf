"""Settings loaded from environment variables.

One frozen Settings object for the whole service. Nothing is required at
import time; every value has a default.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_LOG_LEVEL = "INFO"


def _first_env(*names: str, default: str) -> str:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v.strip()
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "Ignoring non-integer environment value",
            extra={"variable": name, "value": raw, "default": default},
        )
        return default


@dataclass(frozen=True)
class Settings:
    """Service configuration.

    Attributes:
        port: TCP port to listen on.
        host: Interface to bind.
        environment: Deployment label, used only to tag error reports.
        log_level: Root log level name.
    """

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    environment: str = DEFAULT_ENVIRONMENT
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    """Build Settings from the current process environment.

    Variables:
        PORT: listen port (default 3000)
        HOST: bind address (default 0.0.0.0)
        TODO_SERVICE_ENV, ENVIRONMENT: deployment label (default development)
        TODO_SERVICE_LOG_LEVEL: log level name (default INFO)
    """
    return Settings(
        port=_env_int("PORT", DEFAULT_PORT),
        host=_first_env("HOST", default=DEFAULT_HOST),
        environment=_first_env("TODO_SERVICE_ENV", "ENVIRONMENT", default=DEFAULT_ENVIRONMENT),
        log_level=_first_env("TODO_SERVICE_LOG_LEVEL", default=DEFAULT_LOG_LEVEL).upper(),
    )
