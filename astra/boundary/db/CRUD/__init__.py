"""CRUD operation classes and singletons."""

from astra.boundary.db.CRUD.document_chunk_crud import DocumentChunkCRUD, document_chunk_crud
from astra.boundary.db.CRUD.user_crud import UserCRUD, user_crud

__all__ = ["DocumentChunkCRUD", "document_chunk_crud", "UserCRUD", "user_crud"]
