"""
Input normalization shared by the access and admin services
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email

from docgate.core.exceptions import ValidationException


def normalize_email(email: Optional[str]) -> str:
    """Validate an address and return it trimmed and lower-cased"""
    if email is None or not str(email).strip():
        raise ValidationException(message="Email is required", details={"field": "email"})

    try:
        validated = validate_email(str(email).strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationException(
            message="Invalid email address",
            details={"field": "email", "error": str(e)},
        )
    return validated.normalized.lower()


def parse_uuid(value: Any, field: str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if value is None or not str(value).strip():
        raise ValidationException(message=f"{field} is required", details={"field": field})
    try:
        return uuid.UUID(str(value).strip())
    except ValueError:
        raise ValidationException(
            message=f"Invalid {field} format",
            details={"field": field, "value": str(value), "expected_format": "UUID"},
        )


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
