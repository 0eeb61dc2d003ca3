"""Health check payload and the envelope the health route returns."""

from typing import Literal

from pydantic import BaseModel, Field

from product_api.schemas.common import ApiResponse

DatabaseStatus = Literal["connected", "disconnected"]


class HealthResponse(BaseModel):
    """Service status, environment and database reachability."""

    status: Literal["ok"] = Field(default="ok", description="Always ok while the process serves requests")
    environment: str = Field(description="APP_ENV the service runs with (dev or prod)")
    database: DatabaseStatus = Field(description="Result of a SELECT 1 against the configured database")


# GET /health/ responds with {success, message, data: HealthResponse}.
HealthEnvelope = ApiResponse[HealthResponse]
