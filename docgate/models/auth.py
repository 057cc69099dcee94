"""
Admin Auth Pydantic Models
"""

from typing import Optional

from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    """Admin login request"""
    password: Optional[str] = Field(None, description="Admin password")


class StatsResponse(BaseModel):
    """Aggregate counts for the admin panel"""
    success: bool = True
    documents: int
    permissions: int
    pending_first_access: int
    accessed: int
