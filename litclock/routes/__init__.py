"""API routes."""

from fastapi import APIRouter

from litclock.routes import clock

api_router = APIRouter()

# Clock endpoints (HTML + JSON)
api_router.include_router(clock.router, tags=["clock"])
