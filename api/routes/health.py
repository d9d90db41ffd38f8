"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from fastapi import APIRouter
import platform

from core.settings import get_app_settings
from regbridge_sdk.utils.datetime import utc_now


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    
    Returns system health status and the active registrar environment.
    """
    settings = get_app_settings().inwx
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": "regbridge",
        "version": "1.0.0",
        "python_version": platform.python_version(),
        "inwx_environment": settings.environment,
        "read_only": settings.read_only,
    }
