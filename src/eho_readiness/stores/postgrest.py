# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Evidence store adapter for the Supabase / PostgREST schema.

Every listing is one GET against a table endpoint. Transport failures and
non-2xx responses raise ``EvidenceSourceError`` so the snapshot loader can
degrade that single source. Individual rows that cannot be turned into
evidence items are skipped with a warning.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, TypeVar

import httpx
from beartype import beartype
from pydantic import ValidationError

from ..core.config import Settings
from ..core.logging_utils import get_logger
from ..models.base import ensure_utc
from ..models.evidence import (
    ApplianceEvidence,
    AssessmentEvidence,
    CoshhSheetEvidence,
    DocumentEvidence,
    EvidenceItem,
    IncidentEvidence,
    TaskCompletionEvidence,
    TaskTemplateEvidence,
    TemperatureLogEvidence,
    TrainingEvidence,
)
from .protocols import EvidenceSourceError

logger = get_logger(__name__)

ItemT = TypeVar("ItemT", bound=EvidenceItem)
Row = dict[str, Any]


def _document(row: Row) -> DocumentEvidence:
    return DocumentEvidence(
        name=row.get("name") or "",
        expiry_date=row.get("expiry_date"),
        is_active=bool(row.get("is_active", True)),
        category=row.get("category"),
    )


def _coshh_sheet(row: Row) -> CoshhSheetEvidence:
    return CoshhSheetEvidence(
        product_name=row.get("product_name") or "",
        expiry_date=row.get("expiry_date"),
    )


def _assessment(row: Row) -> AssessmentEvidence:
    return AssessmentEvidence(
        template_type=row.get("template_type"),
        title=row.get("title") or "",
        next_review_date=row.get("next_review_date"),
    )


def _training(row: Row) -> TrainingEvidence:
    return TrainingEvidence(course=row.get("training_type"), status=row.get("status"))


def _appliance(row: Row) -> ApplianceEvidence:
    return ApplianceEvidence(
        id=str(row["id"]),
        site_id=str(row.get("site_id") or ""),
        company_id=str(row.get("company_id") or ""),
        name=row.get("name"),
        has_current_test_label=row.get("has_current_pat_label") is True,
    )


def _template(row: Row) -> TaskTemplateEvidence:
    return TaskTemplateEvidence(category=row.get("category"), name=row.get("name") or "")


def _completion(row: Row) -> TaskCompletionEvidence:
    template = row.get("task_templates") or {}
    return TaskCompletionEvidence(
        template_id=row.get("template_id"),
        category=template.get("category"),
        name=template.get("name") or "",
        completed_at=row.get("completed_at"),
    )


def _temperature_log(row: Row) -> TemperatureLogEvidence:
    return TemperatureLogEvidence(id=str(row["id"]), recorded_at=row.get("recorded_at"))


def _incident(row: Row) -> IncidentEvidence:
    return IncidentEvidence(
        id=str(row["id"]),
        incident_type=row.get("incident_type"),
        riddor_reportable=row.get("riddor_reportable") is True,
        reported_date=row.get("reported_date") or row.get("created_at"),
    )


class PostgrestEvidenceStore:
    """Reads evidence tables over the PostgREST HTTP API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            base_url: PostgREST root, e.g. ``https://<project>.supabase.co/rest/v1``
            api_key: Service key, sent as ``apikey`` and bearer token
            timeout: Per-request timeout in seconds
            client: Optional pre-configured client (tests inject a mock transport)
        """
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
        self._timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    @beartype
    def from_settings(cls, settings: Settings) -> "PostgrestEvidenceStore":
        """Build the adapter from application settings."""
        if not settings.evidence_api_url or not settings.evidence_api_key:
            raise ValueError(
                "Evidence store is not configured: set EVIDENCE_API_URL and "
                "EVIDENCE_API_KEY."
            )
        return cls(
            settings.evidence_api_url,
            settings.evidence_api_key,
            timeout=settings.evidence_api_timeout_seconds,
        )

    async def aclose(self) -> None:
        """Close the underlying client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "PostgrestEvidenceStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _select(self, table: str, params: dict[str, str]) -> list[Row]:
        try:
            response = await self._client.get(
                f"{self._base_url}/{table}",
                params=params,
                headers=self._headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise EvidenceSourceError(table, "request timed out") from e
        except httpx.RequestError as e:
            raise EvidenceSourceError(table, f"network error: {e}") from e

        if response.status_code != 200:
            raise EvidenceSourceError(
                table, f"HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            rows = response.json()
        except ValueError as e:
            raise EvidenceSourceError(table, "response is not valid JSON") from e
        if not isinstance(rows, list):
            raise EvidenceSourceError(table, "expected a JSON array of rows")
        return [row for row in rows if isinstance(row, dict)]

    @staticmethod
    def _build(
        table: str, rows: Sequence[Row], factory: Callable[[Row], ItemT]
    ) -> list[ItemT]:
        items: list[ItemT] = []
        for row in rows:
            try:
                items.append(factory(row))
            except (KeyError, ValidationError) as e:
                logger.warning(f"Skipping malformed {table} row: {e}")
        return items

    @beartype
    async def resolve_company_id(self, site_id: str) -> str | None:
        rows = await self._select(
            "sites", {"select": "company_id", "id": f"eq.{site_id}", "limit": "1"}
        )
        if not rows:
            return None
        company_id = rows[0].get("company_id")
        return str(company_id) if company_id else None

    @beartype
    async def list_active_documents(self, company_id: str) -> Sequence[DocumentEvidence]:
        rows = await self._select(
            "global_documents",
            {
                "select": "category,name,expiry_date,is_active",
                "company_id": f"eq.{company_id}",
                "is_active": "eq.true",
            },
        )
        return self._build("global_documents", rows, _document)

    @beartype
    async def list_active_sheets(self, company_id: str) -> Sequence[CoshhSheetEvidence]:
        rows = await self._select(
            "coshh_data_sheets",
            {
                "select": "product_name,expiry_date,status",
                "company_id": f"eq.{company_id}",
                "status": "eq.Active",
            },
        )
        return self._build("coshh_data_sheets", rows, _coshh_sheet)

    @beartype
    async def list_published_assessments(
        self, company_id: str
    ) -> Sequence[AssessmentEvidence]:
        rows = await self._select(
            "risk_assessments",
            {
                "select": "template_type,title,next_review_date,status",
                "company_id": f"eq.{company_id}",
                "status": "eq.Published",
            },
        )
        return self._build("risk_assessments", rows, _assessment)

    @beartype
    async def list_training_records(self, site_id: str) -> Sequence[TrainingEvidence]:
        rows = await self._select(
            "training_bookings",
            {"select": "training_type,status,site_id", "site_id": f"eq.{site_id}"},
        )
        return self._build("training_bookings", rows, _training)

    @beartype
    async def list_appliances(
        self, site_id: str, company_id: str
    ) -> Sequence[ApplianceEvidence]:
        rows = await self._select(
            "pat_appliances",
            {
                "select": "id,name,site_id,company_id,has_current_pat_label",
                "site_id": f"eq.{site_id}",
                "company_id": f"eq.{company_id}",
            },
        )
        return self._build("pat_appliances", rows, _appliance)

    @beartype
    async def list_active_templates(
        self, company_id: str
    ) -> Sequence[TaskTemplateEvidence]:
        # Global templates have no company and are shared by every tenant.
        rows = await self._select(
            "task_templates",
            {
                "select": "category,name,slug,is_active",
                "or": f"(company_id.is.null,company_id.eq.{company_id})",
                "is_active": "eq.true",
            },
        )
        return self._build("task_templates", rows, _template)

    @beartype
    async def list_completions(
        self, site_id: str, window_start: datetime
    ) -> Sequence[TaskCompletionEvidence]:
        rows = await self._select(
            "task_completion_records",
            {
                "select": "template_id,task_templates!inner(category,name),completed_at",
                "site_id": f"eq.{site_id}",
                "completed_at": f"gte.{ensure_utc(window_start).isoformat()}",
            },
        )
        return self._build("task_completion_records", rows, _completion)

    @beartype
    async def list_logs(
        self, site_id: str, window_start: datetime
    ) -> Sequence[TemperatureLogEvidence]:
        rows = await self._select(
            "temperature_logs",
            {
                "select": "id,recorded_at",
                "site_id": f"eq.{site_id}",
                "recorded_at": f"gte.{ensure_utc(window_start).isoformat()}",
            },
        )
        return self._build("temperature_logs", rows, _temperature_log)

    @beartype
    async def list_incidents(self, site_id: str) -> Sequence[IncidentEvidence]:
        rows = await self._select(
            "incidents",
            {
                "select": "id,incident_type,riddor_reportable,created_at",
                "site_id": f"eq.{site_id}",
            },
        )
        return self._build("incidents", rows, _incident)
