"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status, environment and database reachability."""

    status: Literal["ok", "degraded"] = Field(
        default="ok", description="'degraded' when the database is unreachable"
    )
    environment: str = Field(description="Current app environment (dev or prod)")
    version: str = Field(description="Application version")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a trivial query against the configured database"
    )
