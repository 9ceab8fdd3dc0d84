from fastapi import APIRouter, Depends, Request

from city_registry.db.store import CityStore, get_store
from . import cities

api_router = APIRouter()

api_router.include_router(cities.router)


@api_router.get("/health", tags=["health"])
async def health_check(request: Request, store: CityStore = Depends(get_store)):
    """
    Health check endpoint.

    Returns the application status, its environment and how many cities are stored.
    """
    return {
        "status": "ok",
        "environment": request.app.state.settings.app_env,
        "cities": len(store),
    }
