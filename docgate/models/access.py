"""
Access Pydantic Models
Request/response schemas for the visitor-facing endpoints
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from docgate.services.access.models import AccessRecord, AccessResult, DocumentView


class CheckAccessRequest(BaseModel):
    """Request to check which documents an email may open"""
    email: Optional[str] = Field(None, description="Visitor email address")


class MarkAccessedRequest(BaseModel):
    """Request to record that an email opened a document"""
    email: Optional[str] = Field(None, description="Visitor email address")
    document_id: Optional[str] = Field(None, description="Opened document ID")


class AccessResponse(BaseModel):
    """Documents currently open to an email"""
    success: bool = True
    email: str
    has_access: bool
    documents: List[DocumentView]
    warnings: List[str] = Field(default_factory=list)
    missing_document_ids: List[uuid.UUID] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: AccessResult) -> "AccessResponse":
        warnings = []
        if result.missing_document_ids:
            warnings.append(
                f"{len(result.missing_document_ids)} granted document(s) could not be found"
            )
        return cls(
            email=result.email,
            has_access=result.has_access,
            documents=result.documents,
            warnings=warnings,
            missing_document_ids=result.missing_document_ids,
        )


class MarkAccessedResponse(BaseModel):
    success: bool = True
    email: str
    document_id: uuid.UUID
    first_access: bool
    newly_accessed: bool
    notified: bool

    @classmethod
    def from_record(cls, record: AccessRecord) -> "MarkAccessedResponse":
        return cls(**record.model_dump())
