"""
Store Data Models
Records returned by permission store implementations

Timestamps are always UTC-aware, whatever the backend hands back.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docgate.db.base import as_utc


class DocumentRecord(BaseModel):
    """A stored document"""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    introduction: str
    link: str
    thank_you_content: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class PermissionRecord(BaseModel):
    """A stored (email, document) grant"""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    document_id: uuid.UUID
    first_access: bool = True
    deadline: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    document_title: Optional[str] = Field(None, description="Filled by listing queries only")

    @field_validator("deadline", "created_at", "updated_at", mode="after")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None


class StoreStats(BaseModel):
    """Aggregate counts for the admin panel"""
    documents: int = 0
    permissions: int = 0
    pending_first_access: int = 0
    accessed: int = 0
