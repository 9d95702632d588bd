"""Tests for expiry-status derivation and its day boundaries."""

from datetime import datetime, timedelta

import pytest

from eho_readiness.models.report import RequirementStatus
from eho_readiness.readiness.status import days_until, derive_status


class TestDaysUntil:
    """Test whole-day rounding."""

    def test_partial_days_round_up(self, now: datetime) -> None:
        """Test that any fraction of a day counts as a full day."""
        assert days_until(now + timedelta(hours=1), now) == 1
        assert days_until(now + timedelta(days=29, hours=1), now) == 30

    def test_exact_days(self, now: datetime) -> None:
        """Test exact multiples of a day."""
        assert days_until(now + timedelta(days=30), now) == 30
        assert days_until(now, now) == 0

    def test_past_dates_are_negative(self, now: datetime) -> None:
        """Test expiry dates in the past."""
        assert days_until(now - timedelta(days=5), now) == -5

    def test_naive_datetimes_treated_as_utc(self, now: datetime) -> None:
        """Test naive expiry dates are compared as UTC."""
        naive = (now + timedelta(days=3)).replace(tzinfo=None)
        assert days_until(naive, now) == 3


class TestDeriveStatus:
    """Test status rules and boundaries."""

    def test_not_found_is_missing(self, now: datetime) -> None:
        """Test unfound requirements are missing regardless of expiry."""
        assert derive_status(False, None, now) is RequirementStatus.MISSING
        assert (
            derive_status(False, now + timedelta(days=100), now)
            is RequirementStatus.MISSING
        )

    def test_no_expiry_is_valid(self, now: datetime) -> None:
        """Test evidence without an expiry date is valid."""
        assert derive_status(True, None, now) is RequirementStatus.VALID

    @pytest.mark.parametrize(
        ("offset", "expected"),
        [
            (timedelta(days=30), RequirementStatus.VALID),
            (timedelta(days=29), RequirementStatus.EXPIRING_SOON),
            (timedelta(days=10), RequirementStatus.EXPIRING_SOON),
            (timedelta(0), RequirementStatus.EXPIRING_SOON),
            (timedelta(seconds=-1), RequirementStatus.EXPIRED),
            (timedelta(days=-5), RequirementStatus.EXPIRED),
            (timedelta(days=365), RequirementStatus.VALID),
        ],
    )
    def test_boundaries(
        self, now: datetime, offset: timedelta, expected: RequirementStatus
    ) -> None:
        """Test the 30-day expiring window and the expired edge."""
        assert derive_status(True, now + offset, now) is expected

    def test_custom_window(self, now: datetime) -> None:
        """Test the expiring-soon window is configurable."""
        expiry = now + timedelta(days=10)
        assert (
            derive_status(True, expiry, now, expiring_soon_days=7)
            is RequirementStatus.VALID
        )
        assert (
            derive_status(True, expiry, now, expiring_soon_days=14)
            is RequirementStatus.EXPIRING_SOON
        )
