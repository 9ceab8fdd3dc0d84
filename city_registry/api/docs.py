"""
Machine-readable API description.

Route metadata (summaries, documented bodies and responses) lives next to
each route registration; this module turns it into an OpenAPI 3.0 document
once, when the app is built, and serves it to the Swagger UI.
"""
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from city_registry.core.config import Settings

TAGS_METADATA = [
    {
        "name": "cities",
        "description": "Create, read, update and delete cities held in memory.",
    },
    {
        "name": "health",
        "description": "Health check endpoints.",
    },
]


def build_openapi_schema(app: FastAPI, settings: Settings) -> Dict[str, Any]:
    """Generate the OpenAPI document describing every route of the app."""
    return get_openapi(
        title=settings.app_name,
        version=settings.app_version,
        openapi_version=settings.openapi_version,
        description=settings.app_description,
        routes=app.routes,
        tags=TAGS_METADATA,
        servers=[{"url": settings.public_url}],
    )


def install_openapi(app: FastAPI, settings: Settings) -> Dict[str, Any]:
    """Replace the app's OpenAPI generator and build the document eagerly."""

    def openapi() -> Dict[str, Any]:
        if app.openapi_schema is None:
            app.openapi_schema = build_openapi_schema(app, settings)
        return app.openapi_schema

    app.openapi = openapi
    return openapi()
