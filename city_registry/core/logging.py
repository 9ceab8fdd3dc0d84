import logging
import sys
from typing import Optional

from city_registry.core.config import Settings, settings as default_settings
from city_registry.middleware.request_id import request_id_context


class RequestIDFilter(logging.Filter):
    """Filter that stamps the current request_id onto log records."""

    def filter(self, record):
        if not hasattr(record, "request_id"):
            # 'N/A' outside of a request
            record.request_id = request_id_context.get()
        return True


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Configure structured logging for the application."""
    settings = settings or default_settings
    log_level = logging.DEBUG if settings.is_dev else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIDFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    app_logger = logging.getLogger("city_registry")
    app_logger.setLevel(log_level)

    # uvicorn installs its own handlers; route everything through ours
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True

    logging.getLogger("uvicorn").setLevel(log_level)
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.setLevel(logging.INFO)

    # Quieter access log outside dev
    if not settings.is_dev:
        uvicorn_access.setLevel(logging.WARNING)

    return app_logger


def get_logger(name: str = "city_registry") -> logging.Logger:
    """Return a logger under the application namespace."""
    return logging.getLogger(name)
