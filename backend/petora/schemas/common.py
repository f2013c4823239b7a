"""Shared response building blocks and the error/health envelopes."""

from datetime import datetime
from typing import Annotated, Any, Optional

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _stringify_object_id(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


PyObjectId = Annotated[str, BeforeValidator(_stringify_object_id)]


class ResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RecordResponse(ResponseModel):
    """Identity and timestamps carried by every stored record."""

    id: PyObjectId = Field(alias="_id", description="Record identity (ObjectId hex)")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")


class MessageResponse(ResponseModel):
    message: str


class ErrorResponse(BaseModel):
    """
    Error envelope returned by every exception handler.

    Example:
        {
            "error": "not_found",
            "message": "Pet not found",
            "details": {"resource": "pet", "resource_id": "66a0..."},
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
