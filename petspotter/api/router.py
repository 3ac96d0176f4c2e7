"""
API router - aggregates all endpoint modules. Routes are mounted at the root.
"""

from fastapi import APIRouter

from petspotter.api.endpoints import health, images, pet_posts, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, tags=["users"])
api_router.include_router(pet_posts.router, prefix="/petposts", tags=["petposts"])
api_router.include_router(images.router, prefix="/upload-images", tags=["images"])
