"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import photos, travels, days, share

api_router = APIRouter()

# Include all route modules
api_router.include_router(photos.router)
api_router.include_router(travels.router)
api_router.include_router(days.router)
api_router.include_router(share.router)
