"""Health Check Endpoint"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.schemas.common import HealthCheck

router = APIRouter(tags=["health"])


async def check_database() -> bool:
    """Check database connection health"""
    from app.core.database import check_db_connection
    return await check_db_connection()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> JSONResponse:
    """
    Health check endpoint that verifies the database is reachable.

    Returns:
        200 OK if all services are healthy
        503 Service Unavailable otherwise
    """
    checks = {
        "database": await check_database(),
    }

    all_healthy = all(checks.values())

    response_data = HealthCheck(
        status="healthy" if all_healthy else "unhealthy",
        services=checks,
        version=settings.APP_VERSION,
    )

    return JSONResponse(
        status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response_data.model_dump()
    )
