"""Tests for report assembly and overall summaries."""

from collections.abc import Callable
from datetime import datetime

from eho_readiness.models.evidence import EvidenceSnapshot, EvidenceSource, IncidentEvidence
from eho_readiness.models.report import (
    CategoryStatus,
    CategorySummary,
    IncidentCounters,
    StarRating,
)
from eho_readiness.models.requirement import RequirementCategory
from eho_readiness.readiness.aggregator import star_rating
from eho_readiness.readiness.catalog import CATALOG_VERSION
from eho_readiness.readiness.report import assemble, count_incidents, summarise


def _category(
    category: RequirementCategory,
    rate: int,
    total: int,
    met: int,
    expired: int = 0,
    expiring: int = 0,
) -> CategorySummary:
    rating: StarRating = star_rating(rate, expired, expiring)
    return CategorySummary(
        category=category,
        requirements=(),
        total_count=total,
        met_count=met,
        completion_rate=rate,
        category_status=CategoryStatus.PARTIAL,
        expiring_count=expiring,
        expired_count=expired,
        star_rating=rating,
    )


class TestSummarise:
    """Test overall figures."""

    def test_unweighted_category_mean(self) -> None:
        """Test 70% and 40% categories average to 55% regardless of size."""
        overall = summarise(
            [
                _category(RequirementCategory.FOOD_SAFETY, 70, total=10, met=7),
                _category(RequirementCategory.LEGAL, 40, total=5, met=2),
            ]
        )
        assert overall.overall_completion_rate == 55
        assert overall.total_requirements == 15
        assert overall.completed_requirements == 9

    def test_mean_rounds_half_up(self) -> None:
        """Test an x.5 mean rounds up."""
        overall = summarise(
            [
                _category(RequirementCategory.FOOD_SAFETY, 50, total=2, met=1),
                _category(RequirementCategory.LEGAL, 33, total=3, met=1),
            ]
        )
        assert overall.overall_completion_rate == 42

    def test_expiry_counts_feed_overall_rating(self) -> None:
        """Test expired and expiring counts are summed into the overall rating."""
        overall = summarise(
            [
                _category(RequirementCategory.FOOD_SAFETY, 100, 4, 4, expiring=2),
                _category(RequirementCategory.FIRE_SAFETY, 80, 5, 4, expired=1),
            ]
        )
        assert overall.expiring_count == 2
        assert overall.expired_count == 1
        assert overall.star_rating.penalty == 5
        assert overall.star_rating.adjusted_score == 85.0
        assert overall.star_rating.stars == 4

    def test_no_categories(self) -> None:
        """Test an empty catalog scores zero."""
        overall = summarise([])
        assert overall.overall_completion_rate == 0
        assert overall.total_requirements == 0
        assert overall.star_rating.stars == 0


class TestAssemble:
    """Test final report composition."""

    def test_categories_sorted_lowest_first(self, now: datetime) -> None:
        """Test categories are ordered by ascending completion, stable on ties."""
        report = assemble(
            [
                _category(RequirementCategory.FOOD_SAFETY, 80, 10, 8),
                _category(RequirementCategory.LEGAL, 25, 4, 1),
                _category(RequirementCategory.TRAINING, 80, 5, 4),
                _category(RequirementCategory.CLEANING, 0, 3, 0),
            ],
            IncidentCounters(),
            site_id="site-001",
            company_id="company-001",
            generated_at=now,
        )

        assert [c.category for c in report.categories] == [
            RequirementCategory.CLEANING,
            RequirementCategory.LEGAL,
            RequirementCategory.FOOD_SAFETY,
            RequirementCategory.TRAINING,
        ]
        assert report.catalog_version == CATALOG_VERSION
        assert report.generated_at == now
        assert report.partial_data is False

    def test_failed_sources_mark_partial(self, now: datetime) -> None:
        """Test failed sources are carried and flag partial data."""
        report = assemble(
            [_category(RequirementCategory.LEGAL, 50, 2, 1)],
            IncidentCounters(),
            site_id="site-001",
            company_id="company-001",
            generated_at=now,
            failed_sources=[EvidenceSource.TRAINING],
        )
        assert report.failed_sources == (EvidenceSource.TRAINING,)
        assert report.partial_data is True
        assert report.model_dump(mode="json")["partial_data"] is True


class TestCountIncidents:
    """Test incident counters."""

    def test_counts(self, make_snapshot: Callable[..., EvidenceSnapshot]) -> None:
        """Test totals and RIDDOR reportable counts."""
        snapshot = make_snapshot(
            incidents=(
                IncidentEvidence(id="i1", incident_type="cut"),
                IncidentEvidence(id="i2", incident_type="fall", riddor_reportable=True),
                IncidentEvidence(id="i3", incident_type="burn"),
            )
        )
        counters = count_incidents(snapshot)
        assert counters.total_incidents == 3
        assert counters.riddor_reportable == 1

    def test_no_incidents(self, empty_snapshot: EvidenceSnapshot) -> None:
        """Test an empty history."""
        assert count_incidents(empty_snapshot) == IncidentCounters()
