"""
Health check endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config import settings
from services.envelope import api_response

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Reports API and database status.
    """
    health_status = {
        "status": "healthy",
        "api": "up",
        "database": "unknown",
        "media_backend": settings.MEDIA_STORAGE_BACKEND,
    }

    try:
        from database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        health_status["database"] = "up"
    except Exception as e:
        health_status["database"] = f"down: {str(e)}"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(
        status_code=status_code,
        content=api_response(health_status, "health check", status=status_code).model_dump(),
    )


@router.get("/health/live")
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return api_response({"alive": True}, "alive")
