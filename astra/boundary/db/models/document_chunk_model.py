"""
Document chunk ORM model.

One row per (team_id, document_id, chunk_index): chunk text, character
offsets into the extracted text, embedding vector and document metadata.

Dependencies: sqlalchemy, pgvector, astra.boundary.db.base
System role: Chunk persistence for retrieval
"""

import enum
import uuid
from datetime import datetime

from pgvector.sqlalchemy import Vector
from sqlalchemy import JSON, BigInteger, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from astra.boundary.db.base import Base, TimestampMixin, UUIDMixin

# text-embedding-3-small
EMBEDDING_DIMENSIONS = 1536


class SyncStatus(str, enum.Enum):
    """
    Chunk lifecycle states.

    ACTIVE: Latest ingestion of its source file, served to retrieval
    SUPERSEDED: A newer ingestion of the same storage path replaced it
    """

    ACTIVE = "active"
    SUPERSEDED = "superseded"


class DocumentChunkModel(Base, UUIDMixin, TimestampMixin):
    """
    Document chunk ORM model.

    Attributes:
        team_id: Owning tenant
        document_id: Owning document (many chunks per document)
        chunk_index: 0-based dense position within the document
        content: Trimmed chunk text
        chunk_start / chunk_end: Offsets into the extracted text
        embedding: Vector for similarity search (JSON on SQLite)
        sync_status: active | superseded

    Constraints:
        (team_id, document_id, chunk_index) unique; the upsert conflict target
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        UniqueConstraint(
            "team_id",
            "document_id",
            "chunk_index",
            name="uq_document_chunks_team_document_index",
        ),
        Index("ix_document_chunks_team_storage_path", "team_id", "storage_path"),
    )

    team_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    document_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)
    chunk_start: Mapped[int] = mapped_column(Integer, nullable=False)
    chunk_end: Mapped[int] = mapped_column(Integer, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(
        Vector(EMBEDDING_DIMENSIONS).with_variant(JSON(), "sqlite"),
        nullable=False,
    )

    doc_category: Mapped[str] = mapped_column(String(100), nullable=False, default="other")
    doc_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sensitivity_level: Mapped[str] = mapped_column(String(50), nullable=False, default="general")
    ai_classification: Mapped[dict] = mapped_column(
        JSONB().with_variant(JSON(), "sqlite"),
        nullable=False,
        default=dict,
    )

    file_name: Mapped[str] = mapped_column(String(512), nullable=False)
    original_filename: Mapped[str] = mapped_column(String(512), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    storage_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    uploaded_by: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    upload_source: Mapped[str] = mapped_column(String(50), nullable=False, default="local_upload")

    sync_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SyncStatus.ACTIVE.value,
    )
    file_modified_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_synced_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
