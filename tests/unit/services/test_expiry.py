#!/usr/bin/env python3
"""
Unit Tests for Expiry Classification
Tests for docgate/services/access/expiry.py
"""

from datetime import datetime, timedelta, timezone

import pytest

from docgate.services.access.expiry import (
    ExpiryStatus,
    as_utc,
    evaluate_expiry,
    is_expired,
)

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


class TestEvaluateExpiry:
    """Boundary behaviour of evaluate_expiry"""

    def test_no_deadline_is_permanent(self):
        state = evaluate_expiry(None, NOW)
        assert state.status == ExpiryStatus.PERMANENT
        assert state.days_left is None
        assert state.is_expired is False

    def test_deadline_equal_to_now_is_expired(self):
        state = evaluate_expiry(NOW, NOW)
        assert state.status == ExpiryStatus.EXPIRED
        assert state.days_left == 0

    def test_deadline_in_past_is_expired(self):
        state = evaluate_expiry(NOW - timedelta(days=1), NOW)
        assert state.status == ExpiryStatus.EXPIRED
        assert state.is_expired is True

    def test_one_second_left_is_expiring_soon_with_one_day(self):
        state = evaluate_expiry(NOW + timedelta(seconds=1), NOW)
        assert state.status == ExpiryStatus.EXPIRING_SOON
        assert state.days_left == 1

    def test_exactly_seven_days_is_expiring_soon(self):
        state = evaluate_expiry(NOW + timedelta(days=7), NOW)
        assert state.status == ExpiryStatus.EXPIRING_SOON
        assert state.days_left == 7

    def test_seven_days_and_one_second_is_active(self):
        state = evaluate_expiry(NOW + timedelta(days=7, seconds=1), NOW)
        assert state.status == ExpiryStatus.ACTIVE
        assert state.days_left == 8

    def test_three_days_left(self):
        state = evaluate_expiry(NOW + timedelta(days=3), NOW)
        assert state.status == ExpiryStatus.EXPIRING_SOON
        assert state.days_left == 3

    def test_partial_day_rounds_up(self):
        state = evaluate_expiry(NOW + timedelta(days=2, hours=1), NOW)
        assert state.days_left == 3

    def test_custom_window(self):
        state = evaluate_expiry(NOW + timedelta(days=10), NOW, window_days=14)
        assert state.status == ExpiryStatus.EXPIRING_SOON

    def test_naive_deadline_treated_as_utc(self):
        naive = (NOW + timedelta(days=30)).replace(tzinfo=None)
        state = evaluate_expiry(naive, NOW)
        assert state.status == ExpiryStatus.ACTIVE
        assert state.days_left == 30

    def test_other_timezone_is_compared_in_utc(self):
        tokyo = timezone(timedelta(hours=9))
        deadline = (NOW + timedelta(hours=1)).astimezone(tokyo)
        state = evaluate_expiry(deadline, NOW)
        assert state.status == ExpiryStatus.EXPIRING_SOON
        assert state.days_left == 1

    @pytest.mark.parametrize(
        "offset",
        [
            timedelta(days=-400),
            timedelta(microseconds=-1),
            timedelta(0),
            timedelta(microseconds=1),
            timedelta(hours=23),
            timedelta(days=6, hours=23),
            timedelta(days=90),
        ],
    )
    def test_expired_iff_deadline_not_after_now(self, offset):
        deadline = NOW + offset
        state = evaluate_expiry(deadline, NOW)
        assert state.is_expired == (deadline <= NOW)
        assert is_expired(deadline, NOW) == (deadline <= NOW)


class TestIsExpired:

    def test_none_never_expires(self):
        assert is_expired(None, NOW) is False

    def test_naive_values(self):
        assert is_expired(datetime(2020, 1, 1), NOW) is True


def test_as_utc_converts_aware_values():
    plus_two = timezone(timedelta(hours=2))
    value = datetime(2026, 10, 19, 14, 0, tzinfo=plus_two)
    assert as_utc(value) == NOW
    assert as_utc(value).tzinfo == timezone.utc
