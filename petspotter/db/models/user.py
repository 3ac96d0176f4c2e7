"""
User model - credential record: username, salted hash, access token.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petspotter.db.base import Base

if TYPE_CHECKING:
    from petspotter.db.models.pet_post import PetPost


class User(Base):
    """User entity. Created once at registration, never mutated."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    access_token: Mapped[str] = mapped_column(String(512), unique=True, index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    pet_posts: Mapped[list["PetPost"]] = relationship("PetPost", back_populates="owner")

    def __repr__(self) -> str:
        # Hash and token stay out of reprs (they end up in logs and tracebacks)
        return f"<User(id={self.id}, username={self.username})>"
