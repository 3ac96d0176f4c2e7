# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from petspotter.db.repositories.pet_post_repository import PetPostRepository
from petspotter.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "PetPostRepository"]
