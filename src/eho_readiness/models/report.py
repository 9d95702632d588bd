# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Derived readiness entities, rebuilt from scratch on every evaluation."""

from datetime import datetime
from enum import Enum

from pydantic import Field, computed_field, model_validator

from .base import BaseModelConfig
from .evidence import EvidenceSource
from .requirement import EvidenceType, RequirementCategory


class RequirementStatus(str, Enum):
    """Outcome of evaluating one requirement."""

    MISSING = "missing"
    VALID = "valid"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


class CategoryStatus(str, Enum):
    """Completion state of a category."""

    COMPLETE = "complete"
    PARTIAL = "partial"
    MISSING = "missing"


class RequirementEvaluation(BaseModelConfig):
    """Result of matching one requirement against a snapshot."""

    requirement_id: str = Field(..., min_length=1)
    name: str = Field(...)
    category: RequirementCategory = Field(...)
    evidence_type: EvidenceType = Field(...)
    required: bool = Field(default=True)
    frequency_hint: str = Field(default="")

    found: bool = Field(...)
    matched_description: str | None = Field(default=None)
    expiry_date: datetime | None = Field(default=None)
    status: RequirementStatus = Field(...)

    @model_validator(mode="after")
    def _check_missing_consistency(self) -> "RequirementEvaluation":
        if not self.found:
            if self.status is not RequirementStatus.MISSING:
                raise ValueError("Unfound requirement must have status 'missing'")
            if self.expiry_date is not None:
                raise ValueError("Unfound requirement cannot carry an expiry date")
        elif self.status is RequirementStatus.MISSING:
            raise ValueError("Found requirement cannot have status 'missing'")
        return self

    @property
    def is_met(self) -> bool:
        """Found and not expired; expiring items still count as met."""
        return self.found and self.status is not RequirementStatus.EXPIRED


class StarRating(BaseModelConfig):
    """Penalty-adjusted 0-5 star band."""

    stars: int = Field(..., ge=0, le=5)
    label: str = Field(..., min_length=1)
    adjusted_score: float = Field(..., ge=0.0)
    penalty: int = Field(..., ge=0)


class CategorySummary(BaseModelConfig):
    """Aggregated evaluations for one category."""

    category: RequirementCategory = Field(...)
    requirements: tuple[RequirementEvaluation, ...] = Field(...)
    total_count: int = Field(..., ge=0)
    met_count: int = Field(..., ge=0)
    completion_rate: int = Field(..., ge=0, le=100)
    category_status: CategoryStatus = Field(...)
    expiring_count: int = Field(default=0, ge=0)
    expired_count: int = Field(default=0, ge=0)
    star_rating: StarRating = Field(...)


class OverallSummary(BaseModelConfig):
    """Site-wide totals across all categories."""

    total_requirements: int = Field(..., ge=0)
    completed_requirements: int = Field(..., ge=0)
    overall_completion_rate: int = Field(..., ge=0, le=100)
    expiring_count: int = Field(..., ge=0)
    expired_count: int = Field(..., ge=0)
    star_rating: StarRating = Field(...)


class IncidentCounters(BaseModelConfig):
    """Incident figures shown alongside the readiness score."""

    total_incidents: int = Field(default=0, ge=0)
    riddor_reportable: int = Field(default=0, ge=0)


class ReadinessReport(BaseModelConfig):
    """Inspector-facing readiness report for one site."""

    site_id: str = Field(..., min_length=1)
    company_id: str = Field(..., min_length=1)
    generated_at: datetime = Field(...)
    catalog_version: str = Field(...)
    overall: OverallSummary = Field(...)
    categories: tuple[CategorySummary, ...] = Field(...)
    incidents: IncidentCounters = Field(default_factory=IncidentCounters)
    failed_sources: tuple[EvidenceSource, ...] = Field(default=())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def partial_data(self) -> bool:
        """True when the report was built from an incomplete snapshot."""
        return bool(self.failed_sources)
