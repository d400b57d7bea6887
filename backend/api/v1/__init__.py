"""Version 1 API routers, mounted under the configured prefix."""

from fastapi import APIRouter

from .thoughts import router as thoughts_router
from .users import router as users_router

api_router = APIRouter()
api_router.include_router(users_router)
api_router.include_router(thoughts_router)

__all__ = ["api_router"]
