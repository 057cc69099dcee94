"""
Admin Service
Document management and per-email grants
"""

import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from docgate.core.exceptions import NotFoundException, ValidationException
from docgate.core.logging import get_logger
from docgate.services.access.expiry import as_utc
from docgate.services.access.validation import normalize_email, parse_uuid, utc_now
from docgate.services.store.base import PermissionStore
from docgate.services.store.models import DocumentRecord, PermissionRecord, StoreStats

logger = get_logger(__name__)

REQUIRED_DOCUMENT_FIELDS = ("title", "introduction", "link")

IdLike = Union[str, uuid.UUID, None]


def _require_text(fields: Dict[str, Any], names) -> None:
    blank = [name for name in names if not str(fields.get(name) or "").strip()]
    if blank:
        raise ValidationException(
            message=f"{', '.join(blank)} required",
            details={"missing": blank},
        )


class AdminService:
    """Administrative operations over the permission store"""

    def __init__(
        self,
        store: PermissionStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self._clock = clock

    # Permissions

    async def grant_permission(
        self,
        email: Optional[str],
        document_id: IdLike,
        deadline: Optional[datetime] = None,
    ) -> PermissionRecord:
        """
        Grant a document to an email, optionally until ``deadline``

        Raises:
            ValidationException: bad email/id, or a deadline not in the future
            NotFoundException: unknown document
            AlreadyGrantedException: the pair is already granted
        """
        email = normalize_email(email)
        doc_uuid = parse_uuid(document_id, "document_id")

        if deadline is not None:
            deadline = as_utc(deadline)
            if deadline <= self._clock():
                raise ValidationException(
                    message="Deadline must be in the future",
                    details={"deadline": deadline.isoformat()},
                )

        if await self.store.get_document(doc_uuid) is None:
            raise NotFoundException("Document", details={"document_id": str(doc_uuid)})

        permission = await self.store.create_permission(email, doc_uuid, deadline)
        logger.info(
            f"Permission granted: document {doc_uuid} to {email} "
            f"(deadline={deadline.isoformat() if deadline else 'none'})"
        )
        return permission

    async def revoke_permission(self, permission_id: IdLike) -> None:
        perm_uuid = parse_uuid(permission_id, "permission_id")
        if not await self.store.delete_permission(perm_uuid):
            raise NotFoundException("Permission", details={"permission_id": str(perm_uuid)})
        logger.info(f"Permission revoked: {perm_uuid}")

    async def list_permissions(self) -> List[PermissionRecord]:
        return await self.store.list_permissions()

    async def count_permissions(self) -> int:
        return await self.store.count_permissions()

    # Documents

    async def list_documents(self) -> List[DocumentRecord]:
        return await self.store.list_documents()

    async def get_document(self, document_id: IdLike) -> DocumentRecord:
        doc_uuid = parse_uuid(document_id, "document_id")
        document = await self.store.get_document(doc_uuid)
        if document is None:
            raise NotFoundException("Document", details={"document_id": str(doc_uuid)})
        return document

    async def create_document(
        self,
        title: Optional[str],
        introduction: Optional[str],
        link: Optional[str],
        thank_you_content: Optional[str] = None,
    ) -> DocumentRecord:
        fields = {"title": title, "introduction": introduction, "link": link}
        _require_text(fields, REQUIRED_DOCUMENT_FIELDS)

        document = await self.store.create_document(
            title=title.strip(),
            introduction=introduction.strip(),
            link=link.strip(),
            thank_you_content=thank_you_content or None,
        )
        logger.info(f"Document created: {document.id} '{document.title}'")
        return document

    async def update_document(
        self,
        document_id: IdLike,
        fields: Dict[str, Any],
    ) -> DocumentRecord:
        """Update the given fields; required fields may not be blanked"""
        doc_uuid = parse_uuid(document_id, "document_id")
        _require_text(fields, [name for name in REQUIRED_DOCUMENT_FIELDS if name in fields])

        changes = {
            name: value.strip() if isinstance(value, str) and name in REQUIRED_DOCUMENT_FIELDS else value
            for name, value in fields.items()
        }
        document = await self.store.update_document(doc_uuid, changes)
        if document is None:
            raise NotFoundException("Document", details={"document_id": str(doc_uuid)})

        logger.info(f"Document updated: {doc_uuid} ({', '.join(sorted(changes)) or 'no fields'})")
        return document

    async def delete_document(self, document_id: IdLike) -> None:
        """Delete a document together with every permission referencing it"""
        doc_uuid = parse_uuid(document_id, "document_id")
        if not await self.store.delete_document(doc_uuid):
            raise NotFoundException("Document", details={"document_id": str(doc_uuid)})
        logger.info(f"Document deleted with its permissions: {doc_uuid}")

    async def get_stats(self) -> StoreStats:
        return await self.store.get_stats()
