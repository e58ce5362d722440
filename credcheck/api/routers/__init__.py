"""API sub-routers assembled into a single api_router."""

from fastapi import APIRouter

from credcheck.api.routers.health import router as health_router
from credcheck.api.routers.links import router as links_router
from credcheck.api.routers.sources import router as sources_router
from credcheck.api.routers.translation import router as translation_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(links_router, tags=["links"])
api_router.include_router(translation_router, tags=["translation"])
api_router.include_router(sources_router, tags=["sources"])
