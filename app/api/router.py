from fastapi import APIRouter

from app.api.routes import core, stats

api_router = APIRouter()
api_router.include_router(core.router)
api_router.include_router(stats.router)
