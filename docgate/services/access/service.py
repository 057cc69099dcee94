"""
Access Service
Decides which documents an email may open and records first access

The service holds no per-request state; the store and sender are
injected so each request can build one from the application's
collaborators.
"""

import uuid
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, Union

from docgate.core.exceptions import (
    AccessDeniedException,
    NotFoundException,
    NotificationException,
    StoreUnavailableException,
)
from docgate.core.logging import get_logger
from docgate.services.access.expiry import EXPIRING_SOON_DAYS, ExpiryState, evaluate_expiry
from docgate.services.access.models import AccessRecord, AccessResult, DocumentView
from docgate.services.access.validation import normalize_email, parse_uuid, utc_now
from docgate.services.notification.base import NotificationSender
from docgate.services.notification.templates import (
    DEFAULT_SUBJECT_TEMPLATE,
    build_first_access_email,
)
from docgate.services.store.base import PermissionStore
from docgate.services.store.models import DocumentRecord, PermissionRecord

logger = get_logger(__name__)


class AccessService:
    """
    Email-gated access decisions

    Example:
        ```python
        service = AccessService(store=store, sender=sender)
        result = await service.check_access("reader@example.org")
        for view in result.documents:
            if view.first_access:
                await service.record_access("reader@example.org", view.document_id)
        ```
    """

    def __init__(
        self,
        store: PermissionStore,
        sender: NotificationSender,
        expiring_soon_days: int = EXPIRING_SOON_DAYS,
        subject_template: str = DEFAULT_SUBJECT_TEMPLATE,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.sender = sender
        self.expiring_soon_days = expiring_soon_days
        self.subject_template = subject_template
        self._clock = clock

    # ========================================================================
    # Access Decision
    # ========================================================================

    async def check_access(self, email: Optional[str]) -> AccessResult:
        """
        List the documents an email may currently open

        Expired grants are left out whatever their first_access state.
        Grants whose document row is missing are reported in
        missing_document_ids instead of as views.

        Raises:
            ValidationException: missing or malformed email
            StoreUnavailableException: store failure, not retried
        """
        email = normalize_email(email)
        now = self._clock()

        permissions = await self.store.get_permissions_by_email(email)

        live: List[Tuple[PermissionRecord, ExpiryState]] = []
        for permission in permissions:
            state = evaluate_expiry(permission.deadline, now, self.expiring_soon_days)
            if state.is_expired:
                logger.debug(f"Skipping expired grant {permission.id} for {email}")
                continue
            live.append((permission, state))

        if not live:
            return AccessResult(email=email)

        document_ids = list(dict.fromkeys(p.document_id for p, _ in live))
        documents: Dict[uuid.UUID, DocumentRecord] = {
            doc.id: doc for doc in await self.store.get_documents_by_ids(document_ids)
        }

        views: List[DocumentView] = []
        missing: List[uuid.UUID] = []
        for permission, state in live:
            document = documents.get(permission.document_id)
            if document is None:
                missing.append(permission.document_id)
                continue
            views.append(
                DocumentView(
                    document_id=document.id,
                    permission_id=permission.id,
                    title=document.title,
                    introduction=document.introduction,
                    link=document.link,
                    first_access=permission.first_access,
                    deadline=permission.deadline,
                    expiry_status=state.status,
                    days_left=state.days_left,
                )
            )

        if missing:
            logger.warning(
                f"{len(missing)} grant(s) for {email} reference missing documents: "
                f"{', '.join(str(m) for m in missing)}"
            )

        return AccessResult(email=email, documents=views, missing_document_ids=missing)

    async def has_access(self, email: Optional[str]) -> bool:
        result = await self.check_access(email)
        return result.has_access

    # ========================================================================
    # First-Access Notifier
    # ========================================================================

    async def record_access(
        self,
        email: Optional[str],
        document_id: Union[str, uuid.UUID, None],
    ) -> AccessRecord:
        """
        Record that an email opened a document

        The conditional first_access flip is the gate: only the call that
        flips it sends the notification. Repeat calls succeed and change
        nothing. Notification problems are logged and never raised.

        Raises:
            ValidationException: missing or malformed email/document id
            NotFoundException: the email holds no grant for the document
            AccessDeniedException: the grant has expired
            StoreUnavailableException: store failure during lookup or flip
        """
        email = normalize_email(email)
        doc_uuid = parse_uuid(document_id, "document_id")

        permission = await self.store.get_permission(email, doc_uuid)
        if permission is None:
            raise NotFoundException(
                "Permission",
                details={"email": email, "document_id": str(doc_uuid)},
            )

        state = evaluate_expiry(permission.deadline, self._clock(), self.expiring_soon_days)
        if state.is_expired:
            raise AccessDeniedException(
                message="Permission has expired",
                details={"document_id": str(doc_uuid), "deadline": permission.deadline.isoformat()},
            )

        claimed = await self.store.claim_first_access(email, doc_uuid)
        if not claimed:
            logger.debug(f"Repeat access by {email} to document {doc_uuid}")
            return AccessRecord(
                email=email,
                document_id=doc_uuid,
                first_access=False,
                newly_accessed=False,
            )

        logger.info(f"First access recorded: {email} opened document {doc_uuid}")
        notified = await self._notify_first_access(email, doc_uuid)

        return AccessRecord(
            email=email,
            document_id=doc_uuid,
            first_access=False,
            newly_accessed=True,
            notified=notified,
        )

    async def _notify_first_access(self, email: str, document_id: uuid.UUID) -> bool:
        """Best-effort thank-you email; returns whether it was accepted"""
        try:
            document = await self.store.get_document(document_id)
        except StoreUnavailableException as e:
            logger.error(f"Could not load document {document_id} for notification: {e.message}")
            return False

        if document is None:
            logger.warning(f"Document {document_id} vanished before notification to {email}")
            return False

        if not (document.thank_you_content or "").strip():
            logger.debug(f"Document {document_id} has no thank-you content, no email sent")
            return False

        message = build_first_access_email(email, document, self.subject_template)

        try:
            result = await self.sender.send(message)
        except NotificationException as e:
            logger.error(
                f"Notification to {email} for document {document_id} failed: "
                f"{e.message} {e.details}"
            )
            return False
        except Exception:
            logger.exception(f"Unexpected error notifying {email} for document {document_id}")
            return False

        if not result.delivered:
            logger.info(f"Notification for {email} was not delivered (provider: {result.provider})")
            return False

        logger.info(
            f"Notification sent to {email} for document {document_id} "
            f"via {result.provider} (id={result.message_id})"
        )
        return True
