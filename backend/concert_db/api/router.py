"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from concert_db.api.routes import concerts

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(concerts.router)
