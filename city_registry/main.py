from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from city_registry.core.config import Settings, settings as default_settings
from city_registry.core.logging import setup_logging, get_logger
from city_registry.middleware.request_id import RequestIDMiddleware, REQUEST_ID_HEADER
from city_registry.api import api_router
from city_registry.api.docs import TAGS_METADATA, install_openapi
from city_registry.db.store import CityNotFoundError, CityStore, SAMPLE_CITIES

logger = get_logger("city_registry.main")

NOT_FOUND_MESSAGE = "City not found"


async def city_not_found_handler(request: Request, exc: CityNotFoundError) -> JSONResponse:
    logger.warning("City not found", extra={"city_id": exc.city_id, "path": request.url.path})
    return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})


def create_app(settings: Optional[Settings] = None, store: Optional[CityStore] = None) -> FastAPI:
    """
    Build the City Registry application.

    The store is owned by the app (`app.state.store`); pass one in to start
    from a known state, otherwise an empty store is created (or one seeded
    with the sample cities when `seed_sample_cities` is enabled).
    """
    settings = settings or default_settings
    setup_logging(settings)

    if store is None:
        store = CityStore(SAMPLE_CITIES if settings.seed_sample_cities else None)

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        debug=settings.debug,
        docs_url=settings.docs_url,
        openapi_url=settings.openapi_url,
        redoc_url=None,
        openapi_tags=TAGS_METADATA,
    )
    app.state.settings = settings
    app.state.store = store

    # Request ID middleware must come before CORS
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    app.add_exception_handler(CityNotFoundError, city_not_found_handler)
    app.include_router(api_router)
    install_openapi(app, settings)

    logger.info(
        "Application created",
        extra={"environment": settings.app_env, "cities": len(store)},
    )
    return app


app = create_app()
