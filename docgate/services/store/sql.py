"""
SQL Permission Store
SQLAlchemy (async) implementation of the permission store
"""

import asyncio
import uuid
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, TypeVar

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from docgate.core.exceptions import (
    AlreadyGrantedException,
    NotFoundException,
    StoreUnavailableException,
)
from docgate.core.logging import get_logger
from docgate.db.base import utcnow
from docgate.db.models import Document, EmailPermission
from docgate.db.session import check_connection
from docgate.services.store.base import PermissionStore
from docgate.services.store.models import DocumentRecord, PermissionRecord, StoreStats

logger = get_logger(__name__)

T = TypeVar("T")

DOCUMENT_FIELDS = ("title", "introduction", "link", "thank_you_content")


class SQLPermissionStore(PermissionStore):
    """
    Permission store backed by the documents/email_permissions tables

    Every operation runs in its own session and is bounded by ``timeout``
    seconds. Timeouts and SQLAlchemy errors surface as
    StoreUnavailableException; nothing is retried.
    """

    def __init__(self, session_maker: async_sessionmaker, timeout: float = 5.0):
        self._session_maker = session_maker
        self.timeout = timeout

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        try:
            async with self._session_maker() as session:
                return await asyncio.wait_for(work(session), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Store operation '{operation}' timed out after {self.timeout}s")
            raise StoreUnavailableException(
                message="Permission store timed out",
                operation=operation,
                details={"timeout_seconds": self.timeout},
            )
        except SQLAlchemyError as e:
            logger.error(f"Store operation '{operation}' failed: {e}")
            raise StoreUnavailableException(
                operation=operation,
                details={"error": str(e)},
            )

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------

    async def get_permissions_by_email(self, email: str) -> List[PermissionRecord]:
        async def work(session: AsyncSession) -> List[PermissionRecord]:
            result = await session.execute(
                select(EmailPermission).where(EmailPermission.email == email)
            )
            return [PermissionRecord.model_validate(p) for p in result.scalars().all()]

        return await self._run("get_permissions_by_email", work)

    async def get_permission(
        self, email: str, document_id: uuid.UUID
    ) -> Optional[PermissionRecord]:
        async def work(session: AsyncSession) -> Optional[PermissionRecord]:
            result = await session.execute(
                select(EmailPermission).where(
                    EmailPermission.email == email,
                    EmailPermission.document_id == document_id,
                )
            )
            perm = result.scalar_one_or_none()
            return PermissionRecord.model_validate(perm) if perm else None

        return await self._run("get_permission", work)

    async def claim_first_access(self, email: str, document_id: uuid.UUID) -> bool:
        async def work(session: AsyncSession) -> bool:
            result = await session.execute(
                update(EmailPermission)
                .where(
                    EmailPermission.email == email,
                    EmailPermission.document_id == document_id,
                    EmailPermission.first_access.is_(True),
                )
                .values(first_access=False, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            await session.commit()
            return result.rowcount == 1

        return await self._run("claim_first_access", work)

    async def create_permission(
        self,
        email: str,
        document_id: uuid.UUID,
        deadline: Optional[datetime] = None,
    ) -> PermissionRecord:
        async def work(session: AsyncSession) -> PermissionRecord:
            existing = await session.execute(
                select(EmailPermission.id).where(
                    EmailPermission.email == email,
                    EmailPermission.document_id == document_id,
                )
            )
            if existing.scalar_one_or_none() is not None:
                raise AlreadyGrantedException(email=email, document_id=str(document_id))

            permission = EmailPermission(
                email=email,
                document_id=document_id,
                first_access=True,
                deadline=deadline,
            )
            session.add(permission)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                # Document deleted after the caller checked it (foreign key)
                if await session.get(Document, document_id) is None:
                    raise NotFoundException("Document", details={"document_id": str(document_id)})
                # Lost a race against a concurrent grant of the same pair
                raise AlreadyGrantedException(email=email, document_id=str(document_id))

            await session.refresh(permission)
            return PermissionRecord.model_validate(permission)

        return await self._run("create_permission", work)

    async def delete_permission(self, permission_id: uuid.UUID) -> bool:
        async def work(session: AsyncSession) -> bool:
            result = await session.execute(
                delete(EmailPermission).where(EmailPermission.id == permission_id)
            )
            await session.commit()
            return result.rowcount > 0

        return await self._run("delete_permission", work)

    async def list_permissions(self) -> List[PermissionRecord]:
        async def work(session: AsyncSession) -> List[PermissionRecord]:
            result = await session.execute(
                select(EmailPermission, Document.title)
                .outerjoin(Document, Document.id == EmailPermission.document_id)
                .order_by(EmailPermission.created_at.desc())
            )
            return [
                PermissionRecord.model_validate(perm).model_copy(
                    update={"document_title": title}
                )
                for perm, title in result.all()
            ]

        return await self._run("list_permissions", work)

    async def count_permissions(self) -> int:
        async def work(session: AsyncSession) -> int:
            result = await session.execute(select(func.count(EmailPermission.id)))
            return result.scalar() or 0

        return await self._run("count_permissions", work)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    async def get_document(self, document_id: uuid.UUID) -> Optional[DocumentRecord]:
        async def work(session: AsyncSession) -> Optional[DocumentRecord]:
            document = await session.get(Document, document_id)
            return DocumentRecord.model_validate(document) if document else None

        return await self._run("get_document", work)

    async def get_documents_by_ids(
        self, document_ids: Sequence[uuid.UUID]
    ) -> List[DocumentRecord]:
        if not document_ids:
            return []

        async def work(session: AsyncSession) -> List[DocumentRecord]:
            result = await session.execute(
                select(Document).where(Document.id.in_(list(document_ids)))
            )
            return [DocumentRecord.model_validate(d) for d in result.scalars().all()]

        return await self._run("get_documents_by_ids", work)

    async def list_documents(self) -> List[DocumentRecord]:
        async def work(session: AsyncSession) -> List[DocumentRecord]:
            result = await session.execute(
                select(Document).order_by(Document.created_at.desc())
            )
            return [DocumentRecord.model_validate(d) for d in result.scalars().all()]

        return await self._run("list_documents", work)

    async def create_document(
        self,
        title: str,
        introduction: str,
        link: str,
        thank_you_content: Optional[str] = None,
    ) -> DocumentRecord:
        async def work(session: AsyncSession) -> DocumentRecord:
            document = Document(
                title=title,
                introduction=introduction,
                link=link,
                thank_you_content=thank_you_content,
            )
            session.add(document)
            await session.commit()
            await session.refresh(document)
            return DocumentRecord.model_validate(document)

        return await self._run("create_document", work)

    async def update_document(
        self, document_id: uuid.UUID, fields: Dict[str, Any]
    ) -> Optional[DocumentRecord]:
        async def work(session: AsyncSession) -> Optional[DocumentRecord]:
            document = await session.get(Document, document_id)
            if document is None:
                return None

            for name, value in fields.items():
                if name in DOCUMENT_FIELDS:
                    setattr(document, name, value)
            document.updated_at = utcnow()

            await session.commit()
            await session.refresh(document)
            return DocumentRecord.model_validate(document)

        return await self._run("update_document", work)

    async def delete_document(self, document_id: uuid.UUID) -> bool:
        async def work(session: AsyncSession) -> bool:
            # Dependents first so no backend is left with orphans
            await session.execute(
                delete(EmailPermission).where(EmailPermission.document_id == document_id)
            )
            result = await session.execute(
                delete(Document).where(Document.id == document_id)
            )
            await session.commit()
            return result.rowcount > 0

        return await self._run("delete_document", work)

    async def get_stats(self) -> StoreStats:
        async def work(session: AsyncSession) -> StoreStats:
            documents = await session.execute(select(func.count(Document.id)))
            permissions = await session.execute(
                select(
                    func.count(EmailPermission.id).label("total"),
                    func.count(EmailPermission.id)
                    .filter(EmailPermission.first_access.is_(True))
                    .label("pending"),
                )
            )
            row = permissions.first()
            total = row.total or 0
            pending = row.pending or 0
            return StoreStats(
                documents=documents.scalar() or 0,
                permissions=total,
                pending_first_access=pending,
                accessed=total - pending,
            )

        return await self._run("get_stats", work)

    async def ping(self) -> bool:
        return await check_connection(self._session_maker)
