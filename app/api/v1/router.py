"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1 import admin, auth, health, tasks

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
