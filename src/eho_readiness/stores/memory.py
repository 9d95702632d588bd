# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""In-memory evidence store for demos, fixtures and local development.

Holds the evidence of a single site. Appliance listings are returned exactly
as stored, without tenant filtering, so the loader's tenant guard sees the
same shape of data a loosely scoped upstream join would produce.
"""

from collections.abc import Sequence
from datetime import datetime

from attrs import define, field
from beartype import beartype

from ..models.base import ensure_utc
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


def _within_window(timestamp: datetime | None, window_start: datetime) -> bool:
    return timestamp is not None and timestamp >= ensure_utc(window_start)


@define
class InMemoryEvidenceStore:
    """Evidence for one site, implementing every store contract."""

    site_id: str = field()
    company_id: str = field()
    documents: list[DocumentEvidence] = field(factory=list)
    coshh_sheets: list[CoshhSheetEvidence] = field(factory=list)
    assessments: list[AssessmentEvidence] = field(factory=list)
    training: list[TrainingEvidence] = field(factory=list)
    appliances: list[ApplianceEvidence] = field(factory=list)
    templates: list[TaskTemplateEvidence] = field(factory=list)
    completions: list[TaskCompletionEvidence] = field(factory=list)
    temperature_logs: list[TemperatureLogEvidence] = field(factory=list)
    incidents: list[IncidentEvidence] = field(factory=list)
    # method name -> exception raised instead of returning data
    failures: dict[str, Exception] = field(factory=dict)

    def _check(self, operation: str) -> None:
        error = self.failures.get(operation)
        if error is not None:
            raise error

    def _owns_company(self, company_id: str) -> bool:
        return company_id == self.company_id

    def _owns_site(self, site_id: str) -> bool:
        return site_id == self.site_id

    @beartype
    async def resolve_company_id(self, site_id: str) -> str | None:
        self._check("resolve_company_id")
        return self.company_id if self._owns_site(site_id) else None

    @beartype
    async def list_active_documents(self, company_id: str) -> Sequence[DocumentEvidence]:
        self._check("list_active_documents")
        if not self._owns_company(company_id):
            return []
        return [document for document in self.documents if document.is_active]

    @beartype
    async def list_active_sheets(self, company_id: str) -> Sequence[CoshhSheetEvidence]:
        self._check("list_active_sheets")
        return list(self.coshh_sheets) if self._owns_company(company_id) else []

    @beartype
    async def list_published_assessments(
        self, company_id: str
    ) -> Sequence[AssessmentEvidence]:
        self._check("list_published_assessments")
        return list(self.assessments) if self._owns_company(company_id) else []

    @beartype
    async def list_training_records(self, site_id: str) -> Sequence[TrainingEvidence]:
        self._check("list_training_records")
        return list(self.training) if self._owns_site(site_id) else []

    @beartype
    async def list_appliances(
        self, site_id: str, company_id: str
    ) -> Sequence[ApplianceEvidence]:
        self._check("list_appliances")
        return list(self.appliances)

    @beartype
    async def list_active_templates(
        self, company_id: str
    ) -> Sequence[TaskTemplateEvidence]:
        self._check("list_active_templates")
        return list(self.templates) if self._owns_company(company_id) else []

    @beartype
    async def list_completions(
        self, site_id: str, window_start: datetime
    ) -> Sequence[TaskCompletionEvidence]:
        self._check("list_completions")
        if not self._owns_site(site_id):
            return []
        return [
            completion
            for completion in self.completions
            if _within_window(completion.completed_at, window_start)
        ]

    @beartype
    async def list_logs(
        self, site_id: str, window_start: datetime
    ) -> Sequence[TemperatureLogEvidence]:
        self._check("list_logs")
        if not self._owns_site(site_id):
            return []
        return [
            log
            for log in self.temperature_logs
            if _within_window(log.recorded_at, window_start)
        ]

    @beartype
    async def list_incidents(self, site_id: str) -> Sequence[IncidentEvidence]:
        self._check("list_incidents")
        return list(self.incidents) if self._owns_site(site_id) else []


__all__ = ["InMemoryEvidenceStore"]
