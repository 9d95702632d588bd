# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Health check endpoint."""

from datetime import datetime, timezone

from beartype import beartype
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ... import __version__
from ...core.config import Settings, get_settings
from ...readiness.catalog import CATALOG_VERSION, list_requirements

router = APIRouter()


class HealthResponse(BaseModel):
    """Service health response."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    status: str = Field(..., pattern=r"^(healthy|degraded)$")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    catalog_version: str = Field(..., description="Requirement catalog version")
    requirement_count: int = Field(..., ge=0)
    evidence_store_configured: bool = Field(
        ..., description="Whether the evidence store URL and key are set"
    )


@router.get("/health", response_model=HealthResponse)
@beartype
async def health_check(
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Report service health; degraded when no evidence store is configured."""
    configured = bool(settings.evidence_api_url and settings.evidence_api_key)
    return HealthResponse(
        status="healthy" if configured else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.api_env,
        catalog_version=CATALOG_VERSION,
        requirement_count=len(list_requirements()),
        evidence_store_configured=configured,
    )
