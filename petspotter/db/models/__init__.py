from petspotter.db.models.pet_post import PetPost
from petspotter.db.models.user import User

__all__ = ["User", "PetPost"]
