"""Liveness/readiness probe. Answers 503 when the database is unreachable."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from lms.core.config import settings
from lms.core.database import check_db_connected, get_db
from lms.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> HealthResponse:
    if check_db_connected(db):
        return HealthResponse(
            status="ok",
            version=request.app.version,
            environment=settings.APP_ENV,
            database="connected",
        )
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        status="degraded",
        version=request.app.version,
        environment=settings.APP_ENV,
        database="disconnected",
    )
