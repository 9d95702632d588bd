# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Readiness engine: load a snapshot, then score it."""

from collections.abc import Sequence
from datetime import datetime, timezone

from beartype import beartype

from ..core.config import Settings, get_settings
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.base import ensure_utc
from ..models.evidence import EvidenceSnapshot
from ..models.report import ReadinessReport
from ..models.requirement import RequirementDefinition
from ..stores.protocols import EvidenceSourceError, SiteDirectory
from .aggregator import aggregate_categories
from .catalog import CATALOG_VERSION, list_requirements
from .matcher import evaluate_all
from .report import assemble, count_incidents
from .snapshot import EvidenceSnapshotLoader
from .status import EXPIRING_SOON_DAYS

logger = get_logger(__name__)


@beartype
def evaluate_snapshot(
    snapshot: EvidenceSnapshot,
    now: datetime,
    requirements: Sequence[RequirementDefinition] | None = None,
    *,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
    catalog_version: str = CATALOG_VERSION,
) -> ReadinessReport:
    """Score a snapshot against the requirement catalog.

    Pure and deterministic: the same snapshot, ``now`` and catalog always
    produce the same report.
    """
    now = ensure_utc(now)
    catalog = list_requirements() if requirements is None else requirements
    evaluations = evaluate_all(
        catalog, snapshot, now, expiring_soon_days=expiring_soon_days
    )
    categories = aggregate_categories(evaluations)

    return assemble(
        categories,
        count_incidents(snapshot),
        site_id=snapshot.site_id,
        company_id=snapshot.company_id,
        generated_at=now,
        failed_sources=snapshot.failed_sources,
        catalog_version=catalog_version,
    )


class ReadinessEngine:
    """Produces readiness reports for sites."""

    def __init__(
        self,
        loader: EvidenceSnapshotLoader,
        site_directory: SiteDirectory,
        requirements: Sequence[RequirementDefinition] | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize engine with its snapshot loader and site directory."""
        self._loader = loader
        self._site_directory = site_directory
        self._requirements = tuple(requirements or list_requirements())
        self._settings = settings or get_settings()

    async def _resolve_company(
        self, site_id: str, company_id: str | None
    ) -> Result[str, str]:
        if company_id and company_id.strip():
            return Ok(company_id.strip())
        try:
            resolved = await self._site_directory.resolve_company_id(site_id)
        except EvidenceSourceError as e:
            return Err(
                "Site lookup unavailable: cannot evaluate readiness for site "
                f"{site_id} ({e})"
            )
        if not resolved:
            return Err(
                "Site not found or has no company: cannot evaluate readiness "
                f"for site {site_id}"
            )
        return Ok(resolved)

    @beartype
    async def generate_readiness_report(
        self,
        site_id: str,
        company_id: str | None = None,
        now: datetime | None = None,
    ) -> Result[ReadinessReport, str]:
        """Generate the readiness report for a site.

        Args:
            site_id: Site to evaluate
            company_id: Owning company; looked up from the site when omitted
            now: Reference time, defaults to the current UTC time

        Returns:
            Result containing the report or an error message when the site
            context is missing
        """
        site_id = site_id.strip()
        if not site_id:
            return Err("Site id is required field: cannot evaluate readiness")

        company = await self._resolve_company(site_id, company_id)
        if company.is_err():
            logger.warning(company.unwrap_err())
            return company  # type: ignore[return-value]
        resolved_company = company.unwrap()

        reference = ensure_utc(now) if now is not None else datetime.now(timezone.utc)
        snapshot = await self._loader.load_snapshot(
            site_id, resolved_company, reference
        )
        report = evaluate_snapshot(
            snapshot,
            reference,
            self._requirements,
            expiring_soon_days=self._settings.expiring_soon_days,
        )

        logger.info(
            f"Readiness for site {site_id}: {report.overall.overall_completion_rate}% "
            f"({report.overall.star_rating.stars} stars)"
            + (" [partial data]" if report.partial_data else "")
        )
        return Ok(report)
