# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Report assembly: overall summary plus prioritised category list."""

from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from beartype import beartype

from ..models.base import ensure_utc
from ..models.evidence import EvidenceSnapshot, EvidenceSource
from ..models.report import (
    CategorySummary,
    IncidentCounters,
    OverallSummary,
    ReadinessReport,
)
from .aggregator import round_half_up, star_rating
from .catalog import CATALOG_VERSION


@beartype
def count_incidents(snapshot: EvidenceSnapshot) -> IncidentCounters:
    """Incident totals for display next to the score."""
    return IncidentCounters(
        total_incidents=len(snapshot.incidents),
        riddor_reportable=sum(1 for i in snapshot.incidents if i.riddor_reportable),
    )


@beartype
def summarise(categories: Sequence[CategorySummary]) -> OverallSummary:
    """Overall totals across categories.

    The overall rate is the unweighted mean of category rates, so every
    category carries the same weight regardless of its size. It can therefore
    differ from ``completed_requirements / total_requirements``.
    """
    if categories:
        mean = Decimal(sum(c.completion_rate for c in categories)) / len(categories)
        overall_rate = round_half_up(mean)
    else:
        overall_rate = 0

    expired = sum(c.expired_count for c in categories)
    expiring = sum(c.expiring_count for c in categories)

    return OverallSummary(
        total_requirements=sum(c.total_count for c in categories),
        completed_requirements=sum(c.met_count for c in categories),
        overall_completion_rate=overall_rate,
        expiring_count=expiring,
        expired_count=expired,
        star_rating=star_rating(overall_rate, expired, expiring),
    )


@beartype
def assemble(
    categories: Sequence[CategorySummary],
    incidents: IncidentCounters,
    *,
    site_id: str,
    company_id: str,
    generated_at: datetime,
    failed_sources: Sequence[EvidenceSource] = (),
    catalog_version: str = CATALOG_VERSION,
) -> ReadinessReport:
    """Compose the final report, lowest-scoring categories first."""
    ordered = tuple(sorted(categories, key=lambda c: c.completion_rate))

    return ReadinessReport(
        site_id=site_id,
        company_id=company_id,
        generated_at=ensure_utc(generated_at),
        catalog_version=catalog_version,
        overall=summarise(ordered),
        categories=ordered,
        incidents=incidents,
        failed_sources=tuple(failed_sources),
    )
