"""
API Dependencies
Collaborator wiring for API routes
"""

from fastapi import Depends, Request

from docgate.core.config import Settings
from docgate.core.exceptions import StoreUnavailableException
from docgate.core.security import verify_admin_token
from docgate.services.access import AccessService, AdminService
from docgate.services.notification import LoggingSender, NotificationSender
from docgate.services.store import PermissionStore


def get_settings(request: Request) -> Settings:
    """Settings the application was created with"""
    return request.app.state.settings


def get_store(request: Request) -> PermissionStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreUnavailableException(message="Permission store not initialized")
    return store


def get_sender(request: Request) -> NotificationSender:
    return getattr(request.app.state, "sender", None) or LoggingSender()


def get_access_service(
    store: PermissionStore = Depends(get_store),
    sender: NotificationSender = Depends(get_sender),
    config: Settings = Depends(get_settings),
) -> AccessService:
    return AccessService(
        store=store,
        sender=sender,
        expiring_soon_days=config.EXPIRING_SOON_DAYS,
        subject_template=config.EMAIL_SUBJECT_TEMPLATE,
    )


def get_admin_service(store: PermissionStore = Depends(get_store)) -> AdminService:
    return AdminService(store=store)


async def require_admin(
    request: Request,
    config: Settings = Depends(get_settings),
) -> dict:
    """
    Dependency guarding admin routes

    Raises:
        AuthenticationException: missing, expired or forged session cookie
    """
    token = request.cookies.get(config.ADMIN_COOKIE_NAME)
    return verify_admin_token(token, config)
