"""Response body for GET /api/health."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status, running version and whether the user/book tables are reachable."""

    status: Literal["ok"] = "ok"
    version: str = Field(description="Bookstore API version")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
