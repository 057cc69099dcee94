"""
Permission Pydantic Models
Request/response schemas for admin grant endpoints
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from docgate.services.store.models import PermissionRecord

UNKNOWN_DOCUMENT_TITLE = "Unknown Document"


class GrantPermissionRequest(BaseModel):
    """Request model for granting a document to an email"""
    email: Optional[str] = Field(None, description="Email to grant the document to")
    document_id: Optional[str] = Field(None, description="Document ID")
    deadline: Optional[datetime] = Field(None, description="Expiry; omit for permanent access")


class PermissionResponse(BaseModel):
    """Response model for permission"""
    id: uuid.UUID
    email: str
    document_id: uuid.UUID
    document_title: Optional[str] = None
    first_access: bool
    deadline: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_record(cls, perm: PermissionRecord, with_title: bool = False) -> "PermissionResponse":
        title = perm.document_title
        if with_title and title is None:
            title = UNKNOWN_DOCUMENT_TITLE
        return cls(
            id=perm.id,
            email=perm.email,
            document_id=perm.document_id,
            document_title=title,
            first_access=perm.first_access,
            deadline=perm.deadline,
            created_at=perm.created_at,
        )


class PermissionEnvelope(BaseModel):
    success: bool = True
    permission: PermissionResponse


class PermissionListResponse(BaseModel):
    success: bool = True
    permissions: List[PermissionResponse]
