"""
Pet post endpoints - lost/found listings.
Reads are open; create and delete pass the access gate.
"""

from fastapi import APIRouter, Request, status

from petspotter.cache.redis_client import PetPostCache
from petspotter.core.dependencies import AppSettings, CurrentUser
from petspotter.db.repositories.pet_post_repository import PetPostRepository
from petspotter.db.session import DbSession
from petspotter.schemas.pet_post import PetPostCreate, PetPostResponse
from petspotter.services.listing_filters import get_dialect
from petspotter.services.pet_post_service import PetPostService

router = APIRouter()


def _get_pet_post_service(session: DbSession, settings: AppSettings) -> PetPostService:
    """Factory for service with repository injection (Dependency Inversion)."""
    cache = PetPostCache(settings.redis_url, settings.pet_post_cache_ttl) if settings.cache_enabled else None
    return PetPostService(
        PetPostRepository(session),
        get_dialect(settings.listing_filter_dialect),
        cache,
    )


@router.get("", response_model=list[PetPostResponse])
async def list_pet_posts(request: Request, session: DbSession, settings: AppSettings):
    """Filtered listing read. Filter parameters depend on the configured dialect; 400 on unknown values."""
    svc = _get_pet_post_service(session, settings)
    return await svc.list_posts(request.query_params)


@router.get("/{post_id}", response_model=PetPostResponse)
async def get_pet_post(session: DbSession, settings: AppSettings, post_id: str):
    svc = _get_pet_post_service(session, settings)
    return await svc.get_by_id(post_id)


@router.post("", response_model=PetPostResponse, status_code=status.HTTP_201_CREATED)
async def create_pet_post(session: DbSession, settings: AppSettings, data: PetPostCreate, user: CurrentUser):
    """Create a listing owned by the authenticated user."""
    svc = _get_pet_post_service(session, settings)
    return await svc.create(data, owner=user)


@router.delete("/{post_id}", response_model=PetPostResponse)
async def delete_pet_post(session: DbSession, settings: AppSettings, post_id: str, user: CurrentUser):
    """Delete a listing and return the deleted record. 404 if it does not exist."""
    svc = _get_pet_post_service(session, settings)
    return await svc.delete(post_id)
