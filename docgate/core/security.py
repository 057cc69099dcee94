"""
Security Utilities
Admin password check and signed admin session tokens
"""

import hmac
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from docgate.core.config import Settings
from docgate.core.exceptions import AuthenticationException

ALGORITHM = "HS256"
ADMIN_SUBJECT = "admin"


def verify_admin_password(password: Optional[str], config: Settings) -> bool:
    """Compare a submitted password with ADMIN_PASSWORD in constant time"""
    if not config.ADMIN_PASSWORD or not password:
        return False
    return hmac.compare_digest(
        password.encode("utf-8"),
        config.ADMIN_PASSWORD.encode("utf-8"),
    )


def create_admin_token(
    config: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed admin session token"""
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ADMIN_SESSION_EXPIRE_MINUTES)

    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"sub": ADMIN_SUBJECT, "exp": expire, "type": "admin_session"}
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=ALGORITHM)


def verify_admin_token(token: Optional[str], config: Settings) -> Dict[str, Any]:
    """Verify an admin session token and return its payload"""
    if not token:
        raise AuthenticationException(message="Admin session required")

    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise AuthenticationException(
            message="Invalid admin session",
            details={"error": str(e)},
        )

    if payload.get("type") != "admin_session" or payload.get("sub") != ADMIN_SUBJECT:
        raise AuthenticationException(
            message="Invalid token type",
            details={"expected": "admin_session", "got": payload.get("type")},
        )

    return payload
