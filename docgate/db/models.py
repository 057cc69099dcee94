"""
SQLAlchemy Database Models
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docgate.db.base import Base, TimestampMixin, UUIDMixin


class Document(UUIDMixin, TimestampMixin, Base):
    """Document SQLAlchemy model"""

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(512), nullable=False)
    introduction: Mapped[str] = mapped_column(Text, nullable=False)
    link: Mapped[str] = mapped_column(String(2048), nullable=False)
    # Body of the first-access email; no email is sent when empty
    thank_you_content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    permissions: Mapped[list["EmailPermission"]] = relationship(
        "EmailPermission",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class EmailPermission(UUIDMixin, TimestampMixin, Base):
    """Grant of one document to one email address"""

    __tablename__ = "email_permissions"
    __table_args__ = (
        UniqueConstraint("email", "document_id", name="uq_email_permissions_email_document"),
    )

    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # True until the email opens the document for the first time
    first_access: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    deadline: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    document: Mapped[Document] = relationship("Document", back_populates="permissions")
