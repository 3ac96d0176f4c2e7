"""
FastAPI dependencies - access gate and settings injection.
The gate is read-only: it resolves the Authorization header to a User or rejects the request.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.exc import SQLAlchemyError

from petspotter.config import Settings, get_settings
from petspotter.core.errors import BadRequestError, UnauthenticatedError
from petspotter.core.security import extract_token
from petspotter.db.models.user import User
from petspotter.db.repositories.user_repository import UserRepository
from petspotter.db.session import DbSession

logger = logging.getLogger(__name__)

# Raw token in the Authorization header; no scheme prefix required
token_header = APIKeyHeader(name="Authorization", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the app was built with (falls back to the environment)."""
    return getattr(request.app.state, "settings", None) or get_settings()


async def get_current_user(
    request: Request,
    session: DbSession,
    authorization: Annotated[str | None, Depends(token_header)],
) -> User:
    """Resolve the access token to a user. 401 if missing or unknown, 400 if the store fails."""
    token = extract_token(authorization)
    if token is None:
        raise UnauthenticatedError()
    try:
        user = await UserRepository(session).get_by_token(token)
    except SQLAlchemyError as e:
        logger.error("Token lookup failed: %s", type(e).__name__)
        raise BadRequestError() from None
    if user is None:
        raise UnauthenticatedError()
    request.state.user = user
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
