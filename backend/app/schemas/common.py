"""
Exercise Tracker Backend — Shared Response Schemas
===================================================

What:  Error and health payloads shared by every router.
"""

from pydantic import BaseModel, Field, RootModel


class ErrorResponse(RootModel[str]):
    """
    Every failure is answered with HTTP 400 and a bare JSON string:

        "Error: duration 'abc' is not a number"
    """

    root: str = Field(examples=["Error: date 'yesterday' is not a valid ISO 8601 date"])


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
