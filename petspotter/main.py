"""
FastAPI application entry point.
Mounts routes, middleware (readiness gate, CORS, Prometheus) and the store lifecycle.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from petspotter.api.router import api_router
from petspotter.cache.redis_client import close_redis
from petspotter.config import Settings, get_settings
from petspotter.core.errors import ServiceUnavailableError, error_response, register_exception_handlers
from petspotter.db.session import StoreContext
from petspotter.services.listing_filters import get_dialect

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: connect the store. Shutdown: dispose pools."""
    settings: Settings = app.state.settings
    store = StoreContext(
        settings.database_url,
        echo=settings.debug,
        recheck_seconds=settings.store_recheck_seconds,
    )
    app.state.store = store
    try:
        await store.connect(create_schema=settings.create_schema_on_startup)
    except Exception as e:
        # Serve anyway: the readiness gate answers 503 until the store is back
        logger.error("Store connection failed: %s", e)
    yield
    await store.disconnect()
    if settings.cache_enabled:
        await close_redis()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    # Fail at startup on a misconfigured dialect rather than on the first query
    get_dialect(settings.listing_filter_dialect)

    app = FastAPI(
        title=settings.app_name,
        description="Lost and found pet listings with token authentication.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    register_exception_handlers(app)

    @app.middleware("http")
    async def readiness_gate(request: Request, call_next):
        """Short-circuit every request with 503 while the store is not connected."""
        store = getattr(request.app.state, "store", None)
        if store is None or not await store.try_recover():
            return error_response(ServiceUnavailableError())
        return await call_next(request)

    # CORS outermost so 503s carry the headers too
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router)

    @app.get("/", tags=["index"])
    async def list_routes(request: Request):
        """Available routes with their methods, read from the OpenAPI schema."""
        paths = request.app.openapi()["paths"]
        return [
            {"path": path, "methods": sorted(method.upper() for method in operations)}
            for path, operations in paths.items()
        ]

    return app


app = create_app()
