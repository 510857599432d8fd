"""
PetPal Backend — Shared Response Schemas
==========================================

What:  Error envelope and health check models shared by every route module.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Failure envelope for all API errors.

    Fields:
        success: Always false
        message: Human-readable description for display to users
        error: Machine-readable error code (e.g. "validation_error", "not_found")
        details: Optional extra context (e.g. which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "success": false,
            "message": "Pet not found",
            "error": "not_found",
            "request_id": "a1b2c3d4"
        }
    """
    success: bool = Field(default=False)
    message: str = Field(description="Human-readable error description")
    error: Optional[str] = Field(default=None, description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
