# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Contracts of the external stores the snapshot loader reads from."""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from attrs import field, frozen

from ..models.evidence import (
    ApplianceEvidence,
    AssessmentEvidence,
    CoshhSheetEvidence,
    DocumentEvidence,
    IncidentEvidence,
    TaskCompletionEvidence,
    TaskTemplateEvidence,
    TemperatureLogEvidence,
    TrainingEvidence,
)


class EvidenceSourceError(Exception):
    """Raised by a store adapter when a collection cannot be fetched."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


@runtime_checkable
class DocumentStore(Protocol):
    async def list_active_documents(
        self, company_id: str
    ) -> Sequence[DocumentEvidence]: ...


@runtime_checkable
class CoshhStore(Protocol):
    async def list_active_sheets(
        self, company_id: str
    ) -> Sequence[CoshhSheetEvidence]: ...


@runtime_checkable
class RiskAssessmentStore(Protocol):
    async def list_published_assessments(
        self, company_id: str
    ) -> Sequence[AssessmentEvidence]: ...


@runtime_checkable
class TrainingStore(Protocol):
    async def list_training_records(
        self, site_id: str
    ) -> Sequence[TrainingEvidence]: ...


@runtime_checkable
class ApplianceStore(Protocol):
    async def list_appliances(
        self, site_id: str, company_id: str
    ) -> Sequence[ApplianceEvidence]: ...


@runtime_checkable
class TaskStore(Protocol):
    async def list_active_templates(
        self, company_id: str
    ) -> Sequence[TaskTemplateEvidence]: ...

    async def list_completions(
        self, site_id: str, window_start: datetime
    ) -> Sequence[TaskCompletionEvidence]: ...


@runtime_checkable
class TemperatureLogStore(Protocol):
    async def list_logs(
        self, site_id: str, window_start: datetime
    ) -> Sequence[TemperatureLogEvidence]: ...


@runtime_checkable
class IncidentStore(Protocol):
    async def list_incidents(self, site_id: str) -> Sequence[IncidentEvidence]: ...


@runtime_checkable
class SiteDirectory(Protocol):
    async def resolve_company_id(self, site_id: str) -> str | None: ...


@frozen
class EvidenceStores:
    """The set of stores one snapshot is loaded from."""

    documents: DocumentStore = field()
    coshh: CoshhStore = field()
    risk_assessments: RiskAssessmentStore = field()
    training: TrainingStore = field()
    appliances: ApplianceStore = field()
    tasks: TaskStore = field()
    temperature_logs: TemperatureLogStore = field()
    incidents: IncidentStore = field()

    @classmethod
    def from_store(cls, store: object) -> "EvidenceStores":
        """Use one adapter that implements every store contract."""
        return cls(
            documents=store,  # type: ignore[arg-type]
            coshh=store,  # type: ignore[arg-type]
            risk_assessments=store,  # type: ignore[arg-type]
            training=store,  # type: ignore[arg-type]
            appliances=store,  # type: ignore[arg-type]
            tasks=store,  # type: ignore[arg-type]
            temperature_logs=store,  # type: ignore[arg-type]
            incidents=store,  # type: ignore[arg-type]
        )
