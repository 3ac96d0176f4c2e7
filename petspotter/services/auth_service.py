"""
Auth service - registration and login against the credential store.
Login failures never reveal whether the username exists.
"""

import logging

from petspotter.core.errors import DuplicateKeyError, NotFoundError, ValidationError
from petspotter.core.metrics import AUTH_EVENTS
from petspotter.core.security import (
    DEFAULT_TOKEN_BYTES,
    generate_access_token,
    hash_password,
    verify_password,
)
from petspotter.db.models.user import User
from petspotter.db.repositories.user_repository import UserRepository
from petspotter.schemas.user import AuthResult

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "User not found"


class AuthService:
    """Handles the two credential use cases: register and login."""

    def __init__(
        self,
        user_repo: UserRepository,
        *,
        password_min_length: int = 8,
        token_bytes: int = DEFAULT_TOKEN_BYTES,
    ):
        self.user_repo = user_repo
        self.password_min_length = password_min_length
        self.token_bytes = token_bytes

    async def register(self, username: str, password: str) -> AuthResult:
        """Create a user with a salted hash and a freshly minted token."""
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")
        if password is None or len(password) < self.password_min_length:
            raise ValidationError(
                f"Password must be a minimum of {self.password_min_length} characters"
            )
        if await self.user_repo.get_by_username(username):
            AUTH_EVENTS.labels(event="register_duplicate").inc()
            raise DuplicateKeyError({"username": username})

        user = User(
            username=username,
            hashed_password=hash_password(password),
            access_token=generate_access_token(self.token_bytes),
        )
        # Unique indexes still guard against a concurrent insert of the same username
        user = await self.user_repo.add(user)
        AUTH_EVENTS.labels(event="register").inc()
        logger.info("Registered user id=%s", user.id)
        return AuthResult.model_validate(user)

    async def login(self, username: str, password: str) -> AuthResult:
        """Verify the password and return the user's existing token."""
        user = await self.user_repo.get_by_username((username or "").strip())
        if user is None or not verify_password(password, user.hashed_password):
            AUTH_EVENTS.labels(event="login_failed").inc()
            raise NotFoundError(LOGIN_FAILED_MESSAGE)
        AUTH_EVENTS.labels(event="login").inc()
        logger.info("Authenticated user id=%s", user.id)
        return AuthResult.model_validate(user)
