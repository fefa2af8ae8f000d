"""Response body for the public health check."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus a database probe; safe to expose without authentication."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: Literal["dev", "prod"] = Field(description="APP_ENV the service runs under")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against the user store",
    )
