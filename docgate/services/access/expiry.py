"""
Permission expiry classification
"""

import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from docgate.db.base import as_utc

EXPIRING_SOON_DAYS = 7

ONE_DAY = timedelta(days=1)


class ExpiryStatus(str, Enum):
    PERMANENT = "permanent"
    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"


class ExpiryState(BaseModel):
    status: ExpiryStatus
    days_left: Optional[int] = None

    @property
    def is_expired(self) -> bool:
        return self.status == ExpiryStatus.EXPIRED


def evaluate_expiry(
    deadline: Optional[datetime],
    now: datetime,
    window_days: int = EXPIRING_SOON_DAYS,
) -> ExpiryState:
    """
    Classify a permission deadline relative to ``now``

    days_left is the number of started days remaining, so a deadline one
    second away still has one day left and a deadline equal to ``now``
    has none.
    """
    if deadline is None:
        return ExpiryState(status=ExpiryStatus.PERMANENT)

    days_left = math.ceil((as_utc(deadline) - as_utc(now)) / ONE_DAY)

    if days_left <= 0:
        return ExpiryState(status=ExpiryStatus.EXPIRED, days_left=0)
    if days_left <= window_days:
        return ExpiryState(status=ExpiryStatus.EXPIRING_SOON, days_left=days_left)
    return ExpiryState(status=ExpiryStatus.ACTIVE, days_left=days_left)


def is_expired(deadline: Optional[datetime], now: datetime) -> bool:
    return deadline is not None and as_utc(deadline) <= as_utc(now)
