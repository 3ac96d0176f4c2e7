"""
Pet post service - listing use cases: filtered reads, detail, create, delete.
Design: Service depends on the repository and an optional cache; controllers stay thin.
"""

import logging
import uuid
from collections.abc import Mapping

from petspotter.cache.redis_client import PetPostCache
from petspotter.core.errors import BadRequestError, NotFoundError
from petspotter.core.metrics import LISTING_QUERIES
from petspotter.db.models.pet_post import PetPost
from petspotter.db.models.user import User
from petspotter.db.repositories.pet_post_repository import PetPostRepository
from petspotter.schemas.pet_post import PetPostCreate, PetPostResponse
from petspotter.services.listing_filters import FilterDialect

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"


def parse_post_id(raw: str) -> uuid.UUID:
    """Malformed ids are a bad request, distinct from a well-formed id that does not exist."""
    try:
        return uuid.UUID(raw)
    except (TypeError, ValueError):
        raise BadRequestError() from None


def _to_response(post: PetPost) -> PetPostResponse:
    return PetPostResponse.model_validate(post)


class PetPostService:
    """Handles all pet post use cases."""

    def __init__(
        self,
        repo: PetPostRepository,
        dialect: FilterDialect,
        cache: PetPostCache | None = None,
    ):
        self.repo = repo
        self.dialect = dialect
        self.cache = cache

    async def _invalidate(self, post_id: uuid.UUID) -> None:
        if self.cache is not None:
            await self.cache.delete(str(post_id))

    async def list_posts(self, params: Mapping[str, str]) -> list[PetPostResponse]:
        """Apply the configured filter dialect. Raises BadFilterError on unrecognized values."""
        listing_filter = self.dialect.parse(params)
        LISTING_QUERIES.labels(dialect=self.dialect.name, filter=listing_filter.dimension).inc()
        posts = await self.repo.find(listing_filter.criteria)
        return [_to_response(p) for p in posts]

    async def get_by_id(self, raw_id: str) -> PetPostResponse:
        post_id = parse_post_id(raw_id)
        if self.cache is not None:
            cached = await self.cache.get(str(post_id))
            if cached:
                return PetPostResponse.model_validate(cached)
        post = await self.repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError(POST_NOT_FOUND)
        resp = _to_response(post)
        if self.cache is not None:
            await self.cache.set(str(post_id), resp.model_dump(mode="json"))
        return resp

    async def create(self, data: PetPostCreate, owner: User | None) -> PetPostResponse:
        """Persist a new listing owned by `owner`. Raises DuplicateKeyError on unique violations."""
        post = PetPost(
            **data.model_dump(),
            owner_id=owner.id if owner is not None else None,
        )
        post = await self.repo.add(post)
        logger.info("Created pet post id=%s status=%s owner=%s", post.id, post.status, post.owner_id)
        return _to_response(post)

    async def delete(self, raw_id: str) -> PetPostResponse:
        """Remove a listing and return it. A second delete of the same id is NotFound."""
        post_id = parse_post_id(raw_id)
        post = await self.repo.get_by_id(post_id)
        if post is None:
            raise NotFoundError(POST_NOT_FOUND)
        resp = _to_response(post)
        await self._invalidate(post_id)
        await self.repo.delete(post)
        # Commit before the second invalidation so a concurrent read cannot re-cache the row
        await self.repo.session.commit()
        await self._invalidate(post_id)
        logger.info("Deleted pet post id=%s", post_id)
        return resp
