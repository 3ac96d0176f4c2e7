"""
Auth service and credential store tests, below the HTTP layer.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from petspotter.core.errors import DuplicateKeyError, NotFoundError, ValidationError
from petspotter.core.security import extract_token, generate_access_token, verify_password
from petspotter.db.models import User
from petspotter.db.repositories.base_repository import REDACTED
from petspotter.db.repositories.user_repository import UserRepository
from petspotter.services.auth_service import AuthService


def test_generated_tokens_are_unique_and_hex():
    tokens = {generate_access_token() for _ in range(10_000)}
    assert len(tokens) == 10_000
    sample = next(iter(tokens))
    assert len(sample) == 256
    int(sample, 16)


@pytest.mark.parametrize(
    "header, expected",
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("abc123", "abc123"),
        ("Bearer abc123", "abc123"),
        ("bearer   abc123 ", "abc123"),
    ],
)
def test_extract_token(header, expected):
    assert extract_token(header) == expected


@pytest.mark.asyncio
async def test_register_hashes_password_and_mints_token(session: AsyncSession):
    service = AuthService(UserRepository(session))
    result = await service.register("alice", "correct-horse")

    stored = await UserRepository(session).get_by_username("alice")
    assert stored is not None
    assert stored.hashed_password != "correct-horse"
    assert verify_password("correct-horse", stored.hashed_password)
    assert stored.access_token == result.access_token
    assert "correct-horse" not in repr(stored)
    assert stored.access_token not in repr(stored)


@pytest.mark.asyncio
async def test_same_password_gets_different_salts(session: AsyncSession):
    service = AuthService(UserRepository(session))
    await service.register("alice", "same-password")
    await service.register("bob", "same-password")
    repo = UserRepository(session)
    alice = await repo.get_by_username("alice")
    bob = await repo.get_by_username("bob")
    assert alice.hashed_password != bob.hashed_password


@pytest.mark.asyncio
async def test_registrations_never_share_tokens(session: AsyncSession):
    service = AuthService(UserRepository(session))
    results = [await service.register(f"user{i}", "password123") for i in range(8)]
    assert len({r.access_token for r in results}) == len(results)


@pytest.mark.asyncio
@pytest.mark.parametrize("username, password", [("alice", "short"), ("alice", "1234567"), ("", "password123"), ("  ", "password123")])
async def test_register_validation(session: AsyncSession, username: str, password: str):
    service = AuthService(UserRepository(session))
    with pytest.raises(ValidationError):
        await service.register(username, password)
    assert await UserRepository(session).count() == 0


@pytest.mark.asyncio
async def test_register_duplicate_username(session: AsyncSession):
    service = AuthService(UserRepository(session))
    first = await service.register("alice", "password123")
    with pytest.raises(DuplicateKeyError) as exc_info:
        await service.register("alice", "password456")
    assert exc_info.value.fields == {"username": "alice"}
    again = await service.login("alice", "password123")
    assert again.access_token == first.access_token


@pytest.mark.asyncio
async def test_unique_index_catches_duplicate_insert(session: AsyncSession):
    """The store itself rejects a second row with the same username, even past the service check."""
    repo = UserRepository(session)
    await repo.add(User(username="alice", hashed_password="x", access_token=generate_access_token()))
    await session.commit()
    with pytest.raises(DuplicateKeyError) as exc_info:
        await repo.add(User(username="alice", hashed_password="y", access_token=generate_access_token()))
    assert exc_info.value.fields == {"username": "alice"}


@pytest.mark.asyncio
async def test_duplicate_token_value_is_redacted(session: AsyncSession):
    repo = UserRepository(session)
    token = generate_access_token()
    await repo.add(User(username="alice", hashed_password="x", access_token=token))
    await session.commit()
    with pytest.raises(DuplicateKeyError) as exc_info:
        await repo.add(User(username="bob", hashed_password="y", access_token=token))
    assert exc_info.value.fields == {"access_token": REDACTED}


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(session: AsyncSession):
    service = AuthService(UserRepository(session))
    await service.register("alice", "password123")
    with pytest.raises(NotFoundError) as wrong_password:
        await service.login("alice", "password124")
    with pytest.raises(NotFoundError) as unknown_user:
        await service.login("mallory", "password123")
    assert wrong_password.value.message == unknown_user.value.message


@pytest.mark.asyncio
async def test_lookup_by_token(session: AsyncSession):
    service = AuthService(UserRepository(session))
    result = await service.register("alice", "password123")
    repo = UserRepository(session)
    user = await repo.get_by_token(result.access_token)
    assert user is not None and user.username == "alice"
    assert await repo.get_by_token("nope") is None
