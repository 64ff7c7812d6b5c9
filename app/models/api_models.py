"""
API response models for the Saffa API.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime, timezone
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ServiceInfo(BaseModel):
    """Response model for the root endpoint"""
    name: str
    status: str


class PhraseIndexStats(BaseModel):
    """Counts describing the loaded phrase dataset"""
    total_count: int = Field(ge=0)
    dutch_count: int = Field(ge=0)
    category_count: int = Field(ge=0)


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint"""
    status: str = Field(description="Overall system status: healthy, unhealthy")
    version: str = Field(description="API version")
    uptime_seconds: int = Field(ge=0, description="System uptime in seconds")
    phrases: Optional[PhraseIndexStats] = Field(default=None, description="Loaded dataset counts")
    error_statistics: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        """Validate health status values"""
        valid_statuses = {"healthy", "unhealthy"}
        if v not in valid_statuses:
            raise ValueError(f"status must be one of: {valid_statuses}")
        return v


class StandardErrorResponse(BaseModel):
    """Standardized error response format"""
    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator('error_code')
    @classmethod
    def validate_error_code(cls, v):
        """Validate error code format"""
        if not v or not v.isupper():
            raise ValueError("error_code must be a non-empty uppercase string")
        return v
