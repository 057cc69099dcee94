"""
Notification Data Models
"""

from typing import Optional

from pydantic import BaseModel, Field


class EmailMessage(BaseModel):
    """An outbound HTML email"""
    to: str = Field(..., description="Recipient address")
    subject: str = Field(..., min_length=1)
    html: str = Field(..., description="Rendered HTML body")


class SendResult(BaseModel):
    """Provider acknowledgement for an outbound message"""
    provider: str
    message_id: Optional[str] = None
    delivered: bool = Field(True, description="False when the message was only logged")
