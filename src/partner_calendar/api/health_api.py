"""
Health API
"""

from fastapi import APIRouter

from partner_calendar.core.database import get_database_health
from partner_calendar.schemas.common import HealthCheckResponse

health_api_router = APIRouter(prefix="/health", tags=["health"])


@health_api_router.get("", response_model=HealthCheckResponse)
def health_status():
    """Overall status is degraded whenever the database is unreachable."""
    database = get_database_health()
    overall = "healthy" if database.get("status") == "healthy" else "degraded"
    return HealthCheckResponse(status=overall, database=database)
