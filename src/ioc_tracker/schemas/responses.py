"""
Pydantic Response Models
========================

API response schemas that are not entries themselves.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field


class UploadResponse(BaseModel):
    """Response for POST /api/upload."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Successfully imported 1200 entries",
                "imported": 1200,
            }
        }
    )

    message: Annotated[str, Field(description="Human-readable result")]
    imported: Annotated[int, Field(ge=0, description="Entries written")]


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    message: Annotated[str, Field(description="Human-readable error")]
    error: Annotated[str | None, Field(description="Error class name")] = None
    details: Annotated[dict[str, Any] | None, Field(description="Context")] = None


class HealthCheckResponse(BaseModel):
    """Response for GET /health."""

    status: str
    version: str
    service: str
    checks: dict[str, Any]
