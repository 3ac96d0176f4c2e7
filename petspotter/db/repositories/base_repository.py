"""
Base repository - generic CRUD interface (SOLID: Interface Segregation, Dependency Inversion).
Store-level uniqueness violations are translated to DuplicateKeyError here, in one place.
"""

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petspotter.core.errors import DuplicateKeyError
from petspotter.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)

REDACTED = "<redacted>"


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    # Columns whose values never leave the store (not even inside error payloads)
    secret_columns: frozenset[str] = frozenset()

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: uuid.UUID) -> ModelType | None:
        """Fetch single entity by primary key. Used for detail endpoints."""
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session. Raises DuplicateKeyError on unique violations."""
        self.session.add(entity)
        try:
            await self.session.flush()  # Get ID without committing
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateKeyError(self._duplicate_fields(entity, exc)) from None
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        """Remove entity from DB."""
        await self.session.delete(entity)
        await self.session.flush()

    def _duplicate_fields(self, entity: ModelType, exc: IntegrityError) -> dict[str, Any]:
        """Unique columns named in the driver's error message, with the values that collided."""
        message = str(exc.orig)
        fields: dict[str, Any] = {}
        for column in self.model.__table__.columns:
            if not column.unique or column.name not in message:
                continue
            value = getattr(entity, column.key, None)
            fields[column.name] = REDACTED if column.name in self.secret_columns else value
        return fields
