"""
Health and readiness gate tests.
"""

import shutil

import pytest
from httpx import ASGITransport, AsyncClient

from petspotter.db.session import StoreContext
from petspotter.main import create_app


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    """GET /health returns 200 and status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_route_index_lists_endpoints(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    routes = {r["path"]: r["methods"] for r in response.json()}
    assert routes["/petposts"] == ["GET", "POST"]
    assert routes["/petposts/{post_id}"] == ["DELETE", "GET"]
    assert routes["/register-user"] == ["POST"]
    assert routes["/authenticate-user"] == ["POST"]
    assert routes["/welcome"] == ["GET"]
    assert routes["/upload-images"] == ["POST"]
    assert routes["/health"] == ["GET"]


@pytest.mark.asyncio
async def test_all_routes_503_without_store(settings):
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        for method, path in [("GET", "/"), ("GET", "/petposts"), ("POST", "/register-user"), ("GET", "/health")]:
            response = await ac.request(method, path)
            assert response.status_code == 503
            assert response.json() == {"success": False, "message": "Service not available"}


@pytest.mark.asyncio
async def test_503_when_store_not_ready(settings):
    app = create_app(settings)
    app.state.store = StoreContext(settings.database_url)  # never connected
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/petposts")
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_store_becomes_unready_after_disconnect(app, store: StoreContext, client: AsyncClient):
    assert (await client.get("/petposts")).status_code == 200
    await store.disconnect()
    assert store.ready is False
    assert (await client.get("/petposts")).status_code == 503


@pytest.mark.asyncio
async def test_cors_headers_present(client: AsyncClient):
    response = await client.get("/petposts", headers={"Origin": "https://example.org"})
    assert response.headers.get("access-control-allow-origin") in ("*", "https://example.org")


@pytest.mark.asyncio
async def test_store_lost_after_startup_answers_503_then_recovers(settings, tmp_path):
    db_dir = tmp_path / "store"
    db_dir.mkdir()
    store = StoreContext(f"sqlite+aiosqlite:///{db_dir / 'pets.db'}", recheck_seconds=0)
    await store.connect(create_schema=True)
    app = create_app(settings)
    app.state.store = store
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            assert (await ac.get("/petposts")).status_code == 200

            # Drop every pooled connection and take the database away
            await store.engine.dispose()
            shutil.rmtree(db_dir)

            response = await ac.get("/petposts")
            assert response.status_code == 503
            assert response.json() == {"success": False, "message": "Service not available"}
            assert store.ready is False
            assert (await ac.get("/health")).status_code == 503

            # Once the store answers again the gate reopens
            db_dir.mkdir()
            response = await ac.get("/petposts")
            assert response.status_code == 200
            assert store.ready is True
    finally:
        await store.disconnect()


@pytest.mark.asyncio
async def test_recovery_attempts_are_spaced_out(settings):
    store = StoreContext(settings.database_url, recheck_seconds=3600)
    await store.connect(create_schema=True)
    try:
        store.ready = False
        # Checked at connect time, so the next attempt is an hour away
        assert await store.try_recover() is False
        store.recheck_seconds = 0
        assert await store.try_recover() is True
    finally:
        await store.disconnect()
