# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Evidence snapshot loader.

All sources are fetched concurrently. A source that fails or times out is
degraded to an empty collection and named in ``failed_sources``; the other
sources are unaffected. Cancelling the load cancels every in-flight fetch.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timedelta

from beartype import beartype

from ..core.config import Settings, get_settings
from ..core.logging_utils import get_logger
from ..models.base import ensure_utc
from ..models.evidence import (
    ApplianceEvidence,
    EvidenceItem,
    EvidenceSnapshot,
    EvidenceSource,
)
from ..stores.protocols import EvidenceStores

logger = get_logger(__name__)


def filter_tenant_appliances(
    appliances: Sequence[ApplianceEvidence], site_id: str, company_id: str
) -> tuple[ApplianceEvidence, ...]:
    """Drop appliance records that belong to another site or company."""
    kept: list[ApplianceEvidence] = []
    dropped = 0
    for appliance in appliances:
        if appliance.site_id == site_id and appliance.company_id == company_id:
            kept.append(appliance)
            continue
        dropped += 1
        logger.warning(
            f"Dropping appliance {appliance.id}: belongs to site "
            f"{appliance.site_id!r} / company {appliance.company_id!r}, "
            f"expected {site_id!r} / {company_id!r}"
        )
    if dropped:
        logger.warning(
            f"Tenant guard dropped {dropped} of {len(appliances)} appliance "
            f"records for site {site_id}"
        )
    return tuple(kept)


def filter_window(
    items: Sequence[EvidenceItem],
    timestamp: Callable[[EvidenceItem], datetime | None],
    window_start: datetime,
) -> tuple[EvidenceItem, ...]:
    """Keep items stamped at or after ``window_start``; undated items are dropped."""
    start = ensure_utc(window_start)
    return tuple(
        item
        for item in items
        if (stamp := timestamp(item)) is not None and ensure_utc(stamp) >= start
    )


class EvidenceSnapshotLoader:
    """Builds an immutable ``EvidenceSnapshot`` from the evidence stores."""

    def __init__(self, stores: EvidenceStores, settings: Settings | None = None) -> None:
        """Initialize loader with stores and optional settings override."""
        self._stores = stores
        self._settings = settings or get_settings()

    async def _fetch(
        self, source: EvidenceSource, call: Awaitable[Sequence[EvidenceItem]]
    ) -> tuple[tuple[EvidenceItem, ...], bool]:
        """Await one source; returns (items, failed)."""
        try:
            items = await asyncio.wait_for(
                call, timeout=self._settings.source_timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Evidence source {source.value} timed out after "
                f"{self._settings.source_timeout_seconds}s; treating as empty"
            )
            return (), True
        except Exception as e:
            logger.warning(
                f"Evidence source {source.value} failed: {e}; treating as empty"
            )
            return (), True
        return tuple(items), False

    @beartype
    async def load_snapshot(
        self, site_id: str, company_id: str, now: datetime
    ) -> EvidenceSnapshot:
        """Fetch every evidence source for one site.

        Args:
            site_id: Site being evaluated
            company_id: Owning company of the site
            now: Reference time; completions and temperature logs are
                limited to the trailing readiness window before it

        Returns:
            Snapshot with one collection per source. Never raises for a
            single source failure.
        """
        now = ensure_utc(now)
        window_start = now - timedelta(days=self._settings.readiness_window_days)
        stores = self._stores

        calls: dict[EvidenceSource, Awaitable[Sequence[EvidenceItem]]] = {
            EvidenceSource.DOCUMENTS: stores.documents.list_active_documents(
                company_id
            ),
            EvidenceSource.COSHH: stores.coshh.list_active_sheets(company_id),
            EvidenceSource.RISK_ASSESSMENTS: (
                stores.risk_assessments.list_published_assessments(company_id)
            ),
            EvidenceSource.TRAINING: stores.training.list_training_records(site_id),
            EvidenceSource.PAT_EQUIPMENT: stores.appliances.list_appliances(
                site_id, company_id
            ),
            EvidenceSource.TASK_TEMPLATES: stores.tasks.list_active_templates(
                company_id
            ),
            EvidenceSource.TASK_COMPLETIONS: stores.tasks.list_completions(
                site_id, window_start
            ),
            EvidenceSource.TEMPERATURE_LOGS: stores.temperature_logs.list_logs(
                site_id, window_start
            ),
            EvidenceSource.INCIDENTS: stores.incidents.list_incidents(site_id),
        }

        results = await asyncio.gather(
            *(self._fetch(source, call) for source, call in calls.items())
        )

        collections: dict[str, tuple[EvidenceItem, ...]] = {}
        failed: list[EvidenceSource] = []
        for source, (items, source_failed) in zip(calls, results):
            collections[source.value] = items
            if source_failed:
                failed.append(source)

        collections[EvidenceSource.PAT_EQUIPMENT.value] = filter_tenant_appliances(
            collections[EvidenceSource.PAT_EQUIPMENT.value],  # type: ignore[arg-type]
            site_id,
            company_id,
        )
        collections[EvidenceSource.TASK_COMPLETIONS.value] = filter_window(
            collections[EvidenceSource.TASK_COMPLETIONS.value],
            lambda item: getattr(item, "completed_at", None),
            window_start,
        )
        collections[EvidenceSource.TEMPERATURE_LOGS.value] = filter_window(
            collections[EvidenceSource.TEMPERATURE_LOGS.value],
            lambda item: getattr(item, "recorded_at", None),
            window_start,
        )

        if failed:
            logger.warning(
                f"Snapshot for site {site_id} is partial; failed sources: "
                f"{', '.join(s.value for s in failed)}"
            )

        return EvidenceSnapshot(
            site_id=site_id,
            company_id=company_id,
            captured_at=now,
            failed_sources=tuple(failed),
            **collections,
        )
