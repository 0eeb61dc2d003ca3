"""Health check endpoint with optional database connectivity check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from product_api.core.config import settings
from product_api.core.database import check_db_connected, get_db
from product_api.schemas.health import HealthEnvelope, HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthEnvelope)
def get_health(db: Session = Depends(get_db)) -> HealthEnvelope:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring; no token required.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthEnvelope.ok(
        HealthResponse(
            status="ok",
            environment=settings.APP_ENV,
            database=db_status,
        )
    )
