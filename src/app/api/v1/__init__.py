from fastapi import APIRouter

from . import pos, reviews, users

api_router = APIRouter(prefix="/api")
api_router.include_router(pos.router)
api_router.include_router(users.router)
api_router.include_router(reviews.router)

__all__ = ["api_router"]
