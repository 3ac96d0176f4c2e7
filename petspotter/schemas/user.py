"""User request/response schemas - API contract and validation."""

import uuid

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Body of both /register-user and /authenticate-user."""

    username: str = Field(..., min_length=1, max_length=255)
    # bcrypt accepts max 72 bytes; longer passwords would be silently truncated
    password: str = Field(..., min_length=1, max_length=72)


class UserCreate(Credentials):
    password: str = Field(..., min_length=8, max_length=72)


class AuthResult(BaseModel):
    """What the auth service hands back: identity plus the user's long-lived token."""

    id: uuid.UUID
    username: str
    access_token: str

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    success: bool = True
    userId: uuid.UUID
    username: str
    accessToken: str


class AuthenticateResponse(BaseModel):
    success: bool = True
    userID: uuid.UUID
    username: str
    accessToken: str
