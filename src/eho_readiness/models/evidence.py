# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Evidence items and the immutable evidence snapshot.

Evidence is owned by external stores; these models are read-only views of it.
Date fields are parsed leniently: a value that cannot be read is treated as
absent rather than failing the whole snapshot.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from beartype import beartype
from pydantic import Field, field_validator

from .base import BaseModelConfig, ensure_utc, parse_lenient_datetime


class EvidenceSource(str, Enum):
    """Evidence collections fetched for one evaluation run."""

    DOCUMENTS = "documents"
    COSHH = "coshh"
    RISK_ASSESSMENTS = "risk_assessments"
    TRAINING = "training"
    PAT_EQUIPMENT = "pat_equipment"
    TASK_TEMPLATES = "task_templates"
    TASK_COMPLETIONS = "task_completions"
    TEMPERATURE_LOGS = "temperature_logs"
    INCIDENTS = "incidents"


class EvidenceItem(BaseModelConfig):
    """Common base for all evidence items."""

    @property
    def label(self) -> str:
        """Human-readable label of the item."""
        return ""


class DocumentEvidence(EvidenceItem):
    """Active company document (policy, certificate, insurance...)."""

    name: str = Field(..., description="Document name as uploaded")
    expiry_date: datetime | None = Field(default=None)
    is_active: bool = Field(default=True)
    category: str | None = Field(default=None)

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _parse_expiry(cls, v: Any) -> datetime | None:
        return parse_lenient_datetime(v)

    @property
    def label(self) -> str:
        return self.name


class CoshhSheetEvidence(EvidenceItem):
    """Active COSHH safety data sheet."""

    product_name: str = Field(...)
    expiry_date: datetime | None = Field(default=None)

    @field_validator("expiry_date", mode="before")
    @classmethod
    def _parse_expiry(cls, v: Any) -> datetime | None:
        return parse_lenient_datetime(v)

    @property
    def label(self) -> str:
        return self.product_name


class AssessmentEvidence(EvidenceItem):
    """Published risk assessment."""

    template_type: str | None = Field(default=None)
    title: str = Field(default="")
    next_review_date: datetime | None = Field(default=None)

    @field_validator("next_review_date", mode="before")
    @classmethod
    def _parse_review(cls, v: Any) -> datetime | None:
        return parse_lenient_datetime(v)

    @property
    def label(self) -> str:
        return self.title


class TrainingEvidence(EvidenceItem):
    """Training booking or record for the site."""

    course: str | None = Field(default=None)
    status: str | None = Field(default=None)

    @property
    def label(self) -> str:
        return self.course or ""


class ApplianceEvidence(EvidenceItem):
    """Portable appliance with its current test-label flag."""

    id: str = Field(..., min_length=1)
    site_id: str = Field(...)
    company_id: str = Field(...)
    name: str | None = Field(default=None)
    has_current_test_label: bool = Field(default=False)

    @property
    def label(self) -> str:
        return self.name or self.id


class TaskTemplateEvidence(EvidenceItem):
    """Configured checklist template."""

    category: str | None = Field(default=None)
    name: str = Field(default="")

    @property
    def label(self) -> str:
        return self.name


class TaskCompletionEvidence(EvidenceItem):
    """Completed checklist task."""

    template_id: str | None = Field(default=None)
    category: str | None = Field(default=None)
    name: str = Field(default="")
    completed_at: datetime | None = Field(default=None)

    @field_validator("completed_at", mode="before")
    @classmethod
    def _parse_completed(cls, v: Any) -> datetime | None:
        return parse_lenient_datetime(v)

    @property
    def label(self) -> str:
        return self.name


class TemperatureLogEvidence(EvidenceItem):
    """Single temperature reading."""

    id: str = Field(..., min_length=1)
    recorded_at: datetime | None = Field(default=None)

    @field_validator("recorded_at", mode="before")
    @classmethod
    def _parse_recorded(cls, v: Any) -> datetime | None:
        return parse_lenient_datetime(v)

    @property
    def label(self) -> str:
        return self.id


class IncidentEvidence(EvidenceItem):
    """Recorded incident, optionally RIDDOR reportable."""

    id: str = Field(..., min_length=1)
    incident_type: str | None = Field(default=None)
    riddor_reportable: bool = Field(default=False)
    reported_date: datetime | None = Field(default=None)

    @field_validator("reported_date", mode="before")
    @classmethod
    def _parse_reported(cls, v: Any) -> datetime | None:
        return parse_lenient_datetime(v)

    @property
    def label(self) -> str:
        return self.incident_type or self.id


class EvidenceSnapshot(BaseModelConfig):
    """All evidence collections for one site at one point in time.

    The snapshot is the only input the matcher reads; it is never mutated once
    loaded. ``failed_sources`` lists the collections that could not be fetched
    and were substituted with empty tuples.
    """

    site_id: str = Field(..., min_length=1)
    company_id: str = Field(..., min_length=1)
    captured_at: datetime = Field(...)

    documents: tuple[DocumentEvidence, ...] = Field(default=())
    coshh: tuple[CoshhSheetEvidence, ...] = Field(default=())
    risk_assessments: tuple[AssessmentEvidence, ...] = Field(default=())
    training: tuple[TrainingEvidence, ...] = Field(default=())
    pat_equipment: tuple[ApplianceEvidence, ...] = Field(default=())
    task_templates: tuple[TaskTemplateEvidence, ...] = Field(default=())
    task_completions: tuple[TaskCompletionEvidence, ...] = Field(default=())
    temperature_logs: tuple[TemperatureLogEvidence, ...] = Field(default=())
    incidents: tuple[IncidentEvidence, ...] = Field(default=())

    failed_sources: tuple[EvidenceSource, ...] = Field(default=())

    @field_validator("captured_at")
    @classmethod
    def _captured_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @beartype
    def collection(self, source: EvidenceSource) -> tuple[EvidenceItem, ...]:
        """Return the items loaded for ``source``."""
        return getattr(self, source.value)

    @property
    def partial(self) -> bool:
        """True when at least one source degraded to empty."""
        return bool(self.failed_sources)
