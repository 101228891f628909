# idcard_api/routers/health.py
"""Health check endpoints."""
import logging

from fastapi import APIRouter, Request

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check(request: Request):
    """Basic health check"""
    settings = request.app.state.settings
    return {
        "success": True,
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@router.get("/db-health")
async def database_health(request: Request):
    """Database connectivity check"""
    healthy = await request.app.state.db.health_check()
    if not healthy:
        logger.error("Database health check failed")
    return {
        "success": healthy,
        "status": "healthy" if healthy else "unhealthy",
        "database": "connected" if healthy else "unreachable",
    }
