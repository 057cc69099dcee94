"""
Permission Store Base Class
Interface consumed by the access and admin services
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from docgate.services.store.models import DocumentRecord, PermissionRecord, StoreStats


class PermissionStore(ABC):
    """
    Abstract permission/document store

    Implementations raise StoreUnavailableException when the backing
    store fails or times out, and AlreadyGrantedException from
    create_permission for a duplicate (email, document) pair.
    Emails are passed in already normalized.
    """

    # Permissions

    @abstractmethod
    async def get_permissions_by_email(self, email: str) -> List[PermissionRecord]:
        """Return every permission held by an email"""
        pass

    @abstractmethod
    async def get_permission(
        self, email: str, document_id: uuid.UUID
    ) -> Optional[PermissionRecord]:
        """Return the permission for an (email, document) pair, if any"""
        pass

    @abstractmethod
    async def claim_first_access(self, email: str, document_id: uuid.UUID) -> bool:
        """
        Flip first_access to False if it is still True

        Returns:
            True only for the call that performed the flip
        """
        pass

    @abstractmethod
    async def create_permission(
        self,
        email: str,
        document_id: uuid.UUID,
        deadline: Optional[datetime] = None,
    ) -> PermissionRecord:
        pass

    @abstractmethod
    async def delete_permission(self, permission_id: uuid.UUID) -> bool:
        """Delete a permission; False when it did not exist"""
        pass

    @abstractmethod
    async def list_permissions(self) -> List[PermissionRecord]:
        """All permissions, newest first, with document titles"""
        pass

    @abstractmethod
    async def count_permissions(self) -> int:
        pass

    # Documents

    @abstractmethod
    async def get_document(self, document_id: uuid.UUID) -> Optional[DocumentRecord]:
        pass

    @abstractmethod
    async def get_documents_by_ids(
        self, document_ids: Sequence[uuid.UUID]
    ) -> List[DocumentRecord]:
        """Return the documents that exist among the given ids"""
        pass

    @abstractmethod
    async def list_documents(self) -> List[DocumentRecord]:
        """All documents, newest first"""
        pass

    @abstractmethod
    async def create_document(
        self,
        title: str,
        introduction: str,
        link: str,
        thank_you_content: Optional[str] = None,
    ) -> DocumentRecord:
        pass

    @abstractmethod
    async def update_document(
        self, document_id: uuid.UUID, fields: Dict[str, Any]
    ) -> Optional[DocumentRecord]:
        """Apply field changes; None when the document does not exist"""
        pass

    @abstractmethod
    async def delete_document(self, document_id: uuid.UUID) -> bool:
        """Delete a document and every permission referencing it"""
        pass

    @abstractmethod
    async def get_stats(self) -> StoreStats:
        pass

    async def ping(self) -> bool:
        """Cheap reachability check for health endpoints"""
        return True
