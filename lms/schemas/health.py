"""Health probe payload."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """ok while the database answers, degraded otherwise."""

    status: Literal["ok", "degraded"]
    service: str = "lms-api"
    version: str = Field(description="API version reported by the app")
    environment: str = Field(description="APP_ENV (dev or prod)")
    database: Literal["connected", "disconnected"]
