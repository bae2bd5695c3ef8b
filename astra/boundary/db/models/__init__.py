"""ORM models."""

from astra.boundary.db.models.document_chunk_model import (
    EMBEDDING_DIMENSIONS,
    DocumentChunkModel,
    SyncStatus,
)
from astra.boundary.db.models.user_model import UserModel

__all__ = ["DocumentChunkModel", "SyncStatus", "EMBEDDING_DIMENSIONS", "UserModel"]
