"""API v1 router aggregation."""

from fastapi import APIRouter

from liftlog.api.v1.endpoints import exercises, health, streak, trackings

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(trackings.router, prefix="/trackings", tags=["trackings"])
api_router.include_router(streak.router, prefix="/streak", tags=["streak"])
