"""
PetPost model - a lost or found pet listing.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Enum, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petspotter.db.base import Base

if TYPE_CHECKING:
    from petspotter.db.models.user import User

PET_STATUSES = ("lost", "found")


class PetPost(Base):
    """Listing entity. A single status column keeps lost and found mutually exclusive."""

    __tablename__ = "pet_posts"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    status: Mapped[str] = mapped_column(
        Enum(*PET_STATUSES, name="pet_status", native_enum=False), nullable=False, index=True
    )
    species: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    pet_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sex: Mapped[str | None] = mapped_column(String(50), nullable=True)
    breed: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    owner_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("users.id"), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    owner: Mapped["User"] = relationship("User", back_populates="pet_posts")

    def __repr__(self) -> str:
        return f"<PetPost(id={self.id}, status={self.status}, species={self.species})>"
