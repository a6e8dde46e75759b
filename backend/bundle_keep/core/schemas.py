"""API request and response schemas for BundleKeep."""
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, Optional, Any


# ============= Request Schemas =============

class BundleValidationRequest(BaseModel):
    """Request schema for /bundle/$validate endpoint.

    Carries the raw FHIR bundle exactly as the client submitted it.
    """
    bundle: Dict[str, Any] = Field(
        ...,
        description="FHIR transaction or batch bundle to validate",
    )
    include_structure_validation: bool = Field(
        default=True,
        description="Whether to run structural checks before resolution",
    )
    model_config = ConfigDict(extra="forbid")


# ============= Response Schemas =============

class BundleValidationResponse(BaseModel):
    """Envelope response from /bundle/$validate endpoint."""

    success: bool = Field(..., description="Whether the bundle passed validation")
    data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Validation summary with entry count and warnings",
    )
    error: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Error metadata when success is false",
    )
    model_config = ConfigDict(extra="forbid")


class ResourceVersionResponse(BaseModel):
    """Response from the latest-version lookup endpoint."""

    resource_type: str = Field(..., description="FHIR resource type")
    resource_id: str = Field(..., description="Logical resource id")
    version_id: Optional[str] = Field(
        default=None,
        description="Current version, absent when the resource does not exist",
    )


class ResourceUpsertResponse(BaseModel):
    """Envelope response from the versioned upsert endpoint."""

    success: bool = Field(..., description="Whether the resource was stored")
    data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Stored resource and version metadata",
    )
    error: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Error metadata when success is false",
    )
    model_config = ConfigDict(extra="forbid")


class StatusResponse(BaseModel):
    """Generic status response for health check endpoints."""
    status: str = Field(..., description="Service status")
    system: Optional[str] = Field(None, description="System identifier")
