"""
Permission Store
Read/write access to documents and email permissions

Implementations:
- SQLPermissionStore: SQLAlchemy async engine (PostgreSQL, SQLite)
"""

from docgate.services.store.base import PermissionStore
from docgate.services.store.models import DocumentRecord, PermissionRecord, StoreStats
from docgate.services.store.sql import SQLPermissionStore

__all__ = [
    "PermissionStore",
    "SQLPermissionStore",
    "DocumentRecord",
    "PermissionRecord",
    "StoreStats",
]
