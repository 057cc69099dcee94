"""
Access Service
Permission evaluation for email-gated documents

This package provides:
- Expiry classification of grant deadlines
- The access decision (which documents an email may open)
- First-access recording with a one-time notification
- Admin grant/revoke and document management
"""

from docgate.services.access.admin import AdminService
from docgate.services.access.expiry import (
    EXPIRING_SOON_DAYS,
    ExpiryState,
    ExpiryStatus,
    evaluate_expiry,
    is_expired,
)
from docgate.services.access.models import AccessRecord, AccessResult, DocumentView
from docgate.services.access.service import AccessService

__all__ = [
    "AccessService",
    "AdminService",
    "AccessRecord",
    "AccessResult",
    "DocumentView",
    "EXPIRING_SOON_DAYS",
    "ExpiryState",
    "ExpiryStatus",
    "evaluate_expiry",
    "is_expired",
]
