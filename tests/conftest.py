"""
Pytest fixtures - per-test SQLite store, app, client, auth.
Each test gets its own database file, so tests never see each other's rows.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from petspotter.config import Settings
from petspotter.core.security import generate_access_token, hash_password
from petspotter.db.models import User
from petspotter.db.session import StoreContext
from petspotter.main import create_app

TEST_PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        cache_enabled=False,
        create_schema_on_startup=True,
        cloudinary_api_key="test-key",
        cloudinary_api_secret="test-secret",
    )


@pytest_asyncio.fixture
async def store(settings: Settings) -> AsyncGenerator[StoreContext, None]:
    store = StoreContext(settings.database_url)
    await store.connect(create_schema=True)
    yield store
    await store.disconnect()


@pytest.fixture
def app(settings: Settings, store: StoreContext):
    # ASGITransport does not run the lifespan, so the store is attached here
    application = create_app(settings)
    application.state.store = store
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def session(store: StoreContext) -> AsyncGenerator[AsyncSession, None]:
    async with store.session() as s:
        yield s


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> User:
    user = User(
        username="testuser",
        hashed_password=hash_password(TEST_PASSWORD),
        access_token=generate_access_token(),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    return {"Authorization": test_user.access_token}


@pytest.fixture
def pet_post_payload() -> dict:
    return {
        "status": "lost",
        "petName": "Luna",
        "species": "cat",
        "sex": "female",
        "breed": "Maine Coon",
        "location": "Södermalm, Stockholm",
        "description": "Grey tabby with a red collar",
        "email": "owner@example.com",
        "imageUrl": "https://res.cloudinary.com/petspotter/image/upload/v1/pet-images/luna.jpg",
    }
