"""
User endpoints - registration, login, and an authenticated smoke test.
"""

from fastapi import APIRouter

from petspotter.core.dependencies import AppSettings, CurrentUser
from petspotter.db.repositories.user_repository import UserRepository
from petspotter.db.session import DbSession
from petspotter.schemas.user import (
    AuthenticateResponse,
    Credentials,
    RegisterResponse,
    UserCreate,
)
from petspotter.services.auth_service import AuthService

router = APIRouter()


def _get_auth_service(session: DbSession, settings: AppSettings) -> AuthService:
    return AuthService(
        UserRepository(session),
        password_min_length=settings.password_min_length,
        token_bytes=settings.token_bytes,
    )


@router.post("/register-user", response_model=RegisterResponse)
async def register(session: DbSession, settings: AppSettings, data: UserCreate):
    """Create a user and return its access token. 400 on validation errors or duplicate username."""
    result = await _get_auth_service(session, settings).register(data.username, data.password)
    return RegisterResponse(userId=result.id, username=result.username, accessToken=result.access_token)


@router.post("/authenticate-user", response_model=AuthenticateResponse)
async def authenticate(session: DbSession, settings: AppSettings, data: Credentials):
    """Exchange username/password for the user's token. 404 for unknown user or wrong password alike."""
    result = await _get_auth_service(session, settings).login(data.username, data.password)
    return AuthenticateResponse(userID=result.id, username=result.username, accessToken=result.access_token)


@router.get("/welcome")
async def welcome(user: CurrentUser):
    return {"success": True, "testMessage": "THIS IS THE WELCOME PAGE!"}
