from fastapi import APIRouter
from focushero.api import health, motivation, sessions, settings

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(motivation.router)
api_router.include_router(sessions.router)
api_router.include_router(settings.router)
