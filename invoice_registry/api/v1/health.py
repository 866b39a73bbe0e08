"""Health check endpoint with database connectivity check; open to anyone."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from invoice_registry import __version__
from invoice_registry.api.access import require_open
from invoice_registry.api.deps import get_app_settings
from invoice_registry.core.config import Settings
from invoice_registry.core.database import check_db_connected, get_db
from invoice_registry.schemas.health import HealthResponse

router = APIRouter(dependencies=[Depends(require_open)])


@router.get("/", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        environment=settings.APP_ENV,
        version=__version__,
        database="connected" if connected else "disconnected",
    )
