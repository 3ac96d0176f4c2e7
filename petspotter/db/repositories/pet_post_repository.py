"""
Pet post repository - listing data access.
Filtering is expressed as SQLAlchemy criteria built by the listing filter strategies.
"""

from collections.abc import Sequence

from sqlalchemy import ColumnElement, select

from petspotter.db.models.pet_post import PetPost
from petspotter.db.repositories.base_repository import BaseRepository


class PetPostRepository(BaseRepository[PetPost]):
    """Listing queries, newest first."""

    def __init__(self, session):
        super().__init__(session, PetPost)

    async def find(self, criteria: Sequence[ColumnElement[bool]] = ()) -> list[PetPost]:
        """All listings matching every criterion (no criteria: all listings)."""
        stmt = select(PetPost).where(*criteria).order_by(PetPost.created_at.desc(), PetPost.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
