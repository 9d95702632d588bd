# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Category aggregation and the penalty-adjusted star rating."""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from beartype import beartype

from ..models.report import (
    CategoryStatus,
    CategorySummary,
    RequirementEvaluation,
    RequirementStatus,
    StarRating,
)
from ..models.requirement import RequirementCategory

EXPIRED_PENALTY = 3
EXPIRING_PENALTY = 1

# (minimum adjusted score, stars, label), highest band first
STAR_BANDS: tuple[tuple[int, int, str], ...] = (
    (90, 5, "Very Good"),
    (75, 4, "Good"),
    (60, 3, "Generally Satisfactory"),
    (40, 2, "Improvement Necessary"),
    (20, 1, "Major Improvement Necessary"),
)
_LOWEST_BAND = (0, "Urgent Improvement Necessary")


@beartype
def round_half_up(value: int | float | Decimal) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@beartype
def completion_rate(met_count: int, total_count: int) -> int:
    """Percentage of met requirements, 0 for an empty category."""
    if total_count <= 0:
        return 0
    return round_half_up(Decimal(100 * met_count) / Decimal(total_count))


@beartype
def star_rating(
    completion_pct: int | float, expired_count: int, expiring_count: int
) -> StarRating:
    """Map completion and expiry penalties to a 0-5 star band.

    Each expired item costs 3 points and each expiring item 1 point before the
    completion percentage is banded.
    """
    penalty = expired_count * EXPIRED_PENALTY + expiring_count * EXPIRING_PENALTY
    adjusted = max(0.0, float(completion_pct) - penalty)

    for threshold, stars, label in STAR_BANDS:
        if adjusted >= threshold:
            return StarRating(
                stars=stars, label=label, adjusted_score=adjusted, penalty=penalty
            )
    stars, label = _LOWEST_BAND
    return StarRating(stars=stars, label=label, adjusted_score=adjusted, penalty=penalty)


def _category_status(rate: int) -> CategoryStatus:
    if rate == 100:
        return CategoryStatus.COMPLETE
    if rate > 0:
        return CategoryStatus.PARTIAL
    return CategoryStatus.MISSING


@beartype
def aggregate(
    category: RequirementCategory, evaluations: Sequence[RequirementEvaluation]
) -> CategorySummary:
    """Summarise the evaluations of one category.

    Expiring items still count as met; they lower the star rating instead.
    """
    total = len(evaluations)
    met = sum(1 for evaluation in evaluations if evaluation.is_met)
    expired = sum(
        1 for evaluation in evaluations if evaluation.status is RequirementStatus.EXPIRED
    )
    expiring = sum(
        1
        for evaluation in evaluations
        if evaluation.status is RequirementStatus.EXPIRING_SOON
    )
    rate = completion_rate(met, total)

    return CategorySummary(
        category=category,
        requirements=tuple(evaluations),
        total_count=total,
        met_count=met,
        completion_rate=rate,
        category_status=_category_status(rate),
        expiring_count=expiring,
        expired_count=expired,
        star_rating=star_rating(rate, expired, expiring),
    )


@beartype
def aggregate_categories(
    evaluations: Sequence[RequirementEvaluation],
) -> tuple[CategorySummary, ...]:
    """Group evaluations by category in first-seen order and summarise each."""
    grouped: dict[RequirementCategory, list[RequirementEvaluation]] = {}
    for evaluation in evaluations:
        grouped.setdefault(evaluation.category, []).append(evaluation)
    return tuple(aggregate(category, items) for category, items in grouped.items())
