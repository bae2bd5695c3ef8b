"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - DocumentChunkModel, UserModel, SyncStatus: Persisted entities
  - document_chunk_crud, user_crud: CRUD operation singletons

Dependencies: sqlalchemy, astra.configs
System role: Relational store adapter for chunk rows and team membership
"""

from astra.boundary.db.base import Base, TimestampMixin, UUIDMixin
from astra.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from astra.boundary.db.CRUD import DocumentChunkCRUD, UserCRUD, document_chunk_crud, user_crud
from astra.boundary.db.models import DocumentChunkModel, SyncStatus, UserModel

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentChunkModel",
    "SyncStatus",
    "UserModel",
    "DocumentChunkCRUD",
    "UserCRUD",
    "document_chunk_crud",
    "user_crud",
]
