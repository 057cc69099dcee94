"""
Access Data Models
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from docgate.services.access.expiry import ExpiryStatus


class DocumentView(BaseModel):
    """A document an email may open, merged with its grant state"""
    document_id: uuid.UUID
    permission_id: uuid.UUID
    title: str
    introduction: str
    link: str
    first_access: bool
    deadline: Optional[datetime] = None
    expiry_status: ExpiryStatus
    days_left: Optional[int] = None


class AccessResult(BaseModel):
    """Outcome of an access check for one email"""
    email: str
    documents: List[DocumentView] = Field(default_factory=list)
    missing_document_ids: List[uuid.UUID] = Field(
        default_factory=list,
        description="Granted documents whose rows could not be found",
    )

    @property
    def has_access(self) -> bool:
        return len(self.documents) > 0


class AccessRecord(BaseModel):
    """Outcome of recording that an email opened a document"""
    email: str
    document_id: uuid.UUID
    first_access: bool = Field(..., description="Grant state after the call; false once recorded")
    newly_accessed: bool = Field(..., description="True when this call performed the flip")
    notified: bool = False
