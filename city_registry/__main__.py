import uvicorn

from city_registry.core.config import settings
from city_registry.core.logging import get_logger
from city_registry.main import app

logger = get_logger("city_registry")


def main() -> None:
    """Serve the app with uvicorn on the configured port."""
    logger.info("Server running on %s", settings.public_url)
    logger.info("Swagger UI available at %s%s", settings.public_url, settings.docs_url)
    # log_config=None keeps the handlers installed by setup_logging
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
