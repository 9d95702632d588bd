# EHO Readiness - Compliance Readiness Scoring Engine
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Expiry-status derivation."""

import math
from datetime import datetime, timedelta

from beartype import beartype

from ..models.base import ensure_utc
from ..models.report import RequirementStatus

EXPIRING_SOON_DAYS = 30
_ONE_DAY = timedelta(days=1)


@beartype
def days_until(expiry_date: datetime, now: datetime) -> int:
    """Whole days until expiry, rounded up (negative once past)."""
    delta = ensure_utc(expiry_date) - ensure_utc(now)
    return math.ceil(delta / _ONE_DAY)


@beartype
def derive_status(
    found: bool,
    expiry_date: datetime | None,
    now: datetime,
    *,
    expiring_soon_days: int = EXPIRING_SOON_DAYS,
) -> RequirementStatus:
    """Convert a match outcome into a requirement status.

    Anything strictly before ``now`` is expired, including a fraction of a day
    ago, so an expired status always implies a past expiry date. Otherwise the
    remaining days are rounded up: 0..29 days is ``expiring_soon`` and 30 or
    more is ``valid``.
    """
    if not found:
        return RequirementStatus.MISSING
    if expiry_date is None:
        return RequirementStatus.VALID
    if ensure_utc(expiry_date) < ensure_utc(now):
        return RequirementStatus.EXPIRED
    if days_until(expiry_date, now) < expiring_soon_days:
        return RequirementStatus.EXPIRING_SOON
    return RequirementStatus.VALID
