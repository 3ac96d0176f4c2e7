"""
Health check - liveness for load balancers. Sits behind the readiness gate like every route.
"""

from fastapi import APIRouter

from petspotter.core.dependencies import AppSettings

router = APIRouter()


@router.get("")
async def health(settings: AppSettings):
    """Liveness: is the process up (and, having passed the gate, the store too)?"""
    return {"status": "ok", "app": settings.app_name}
