"""
User repository - the credential store: lookups by username and by access token.
"""

from sqlalchemy import select

from petspotter.db.models.user import User
from petspotter.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific queries. Username and token are each unique, so lookups return at most one row."""

    secret_columns = frozenset({"hashed_password", "access_token"})

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> User | None:
        """Find user by username - used for login and duplicate checks."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_token(self, access_token: str) -> User | None:
        """Find user by access token - used by the access gate on every protected request."""
        result = await self.session.execute(select(User).where(User.access_token == access_token))
        return result.scalar_one_or_none()
