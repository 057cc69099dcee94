"""
Document Pydantic Models
Request/response schemas for admin document endpoints
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from docgate.services.store.models import DocumentRecord


class DocumentCreateRequest(BaseModel):
    """Document creation request schema"""
    title: Optional[str] = Field(None, max_length=512)
    introduction: Optional[str] = None
    link: Optional[str] = Field(None, max_length=2048)
    thank_you_content: Optional[str] = None


class DocumentUpdateRequest(BaseModel):
    """Partial document update; omitted fields are left unchanged"""
    title: Optional[str] = Field(None, max_length=512)
    introduction: Optional[str] = None
    link: Optional[str] = Field(None, max_length=2048)
    thank_you_content: Optional[str] = None


class DocumentResponse(BaseModel):
    """Document response schema"""
    id: uuid.UUID
    title: str
    introduction: str
    link: str
    thank_you_content: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, doc: DocumentRecord) -> "DocumentResponse":
        return cls(**doc.model_dump())


class DocumentEnvelope(BaseModel):
    success: bool = True
    document: DocumentResponse


class DocumentListResponse(BaseModel):
    success: bool = True
    documents: List[DocumentResponse]
