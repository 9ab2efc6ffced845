"""
Health check endpoints for the Certificados API.

Provides:
- /detailed - Full health check (record store + artifact store)
- /ready - Readiness check (DB connectivity)
- /live - Liveness check (service alive)
"""
import time
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.services.storage_service import StorageService, get_storage_service

router = APIRouter(tags=["health"])


class ServiceHealth(BaseModel):
    """Health status of an individual service."""

    status: Literal["healthy", "degraded", "unhealthy"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class DetailedHealthResponse(BaseModel):
    """Comprehensive health check response."""

    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    environment: str
    timestamp: datetime
    services: Dict[str, ServiceHealth]


def check_database(db: Session) -> ServiceHealth:
    """Check database connectivity and latency."""
    try:
        start = time.perf_counter()
        db.execute(text("SELECT 1"))
        latency = (time.perf_counter() - start) * 1000
        return ServiceHealth(status="healthy", latency_ms=round(latency, 2))
    except Exception as e:
        return ServiceHealth(status="unhealthy", message=str(e)[:100])


def check_storage(storage: StorageService) -> ServiceHealth:
    """Check artifact store connectivity."""
    start = time.perf_counter()
    result = storage.health_check()
    latency = (time.perf_counter() - start) * 1000
    if result["status"] == "healthy":
        return ServiceHealth(
            status="healthy",
            latency_ms=round(latency, 2),
            message=f"backend={result['backend']}",
        )
    return ServiceHealth(status="unhealthy", message=str(result.get("error", ""))[:100])


@router.get(
    "/detailed",
    response_model=DetailedHealthResponse,
    summary="Detailed health check",
    description="""
    Returns health status of the record store (database) and the
    artifact store (S3 bucket, or local directory in offline mode).
    """,
)
def detailed_health_check(
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> DetailedHealthResponse:
    services = {
        "database": check_database(db),
        "storage": check_storage(storage),
    }

    statuses = [s.status for s in services.values()]
    if "unhealthy" in statuses:
        overall = "unhealthy"
    elif "degraded" in statuses:
        overall = "degraded"
    else:
        overall = "healthy"

    return DetailedHealthResponse(
        status=overall,
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=datetime.now(timezone.utc),
        services=services,
    )


@router.get(
    "/ready",
    summary="Readiness check",
    description="Quick check if the service is ready to accept traffic.",
)
def readiness_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Kubernetes-style readiness check."""
    return {"ready": check_database(db).status == "healthy"}


@router.get(
    "/live",
    summary="Liveness check",
    description="Quick check if the service is alive.",
)
def liveness_check() -> Dict[str, Any]:
    """Kubernetes-style liveness check."""
    return {"alive": True, "timestamp": datetime.now(timezone.utc).isoformat()}
