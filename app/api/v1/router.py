"""API v1 router: aggregates all sub-routers."""

from fastapi import APIRouter

from app.api.v1 import audience, saved_lists

api_router = APIRouter()

api_router.include_router(audience.router, prefix="/filter-audience", tags=["Filter Audience"])
api_router.include_router(saved_lists.router, prefix="/saved-lists", tags=["Saved Lists"])
