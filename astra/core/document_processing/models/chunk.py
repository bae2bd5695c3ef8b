"""
Chunk domain models for document processing pipeline.

SegmentedChunk is the segmenter's output; ChunkRecord is one row-to-be
in the chunk store, carrying its embedding and document metadata.

Dependencies: pydantic
System role: Data structures for chunks in the ingestion pipeline
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class SegmentedChunk(BaseModel):
    """Contiguous slice of a document's extracted text."""

    index: int = Field(ge=0, description="0-based position in the document")
    content: str = Field(description="Trimmed chunk text")
    start: int = Field(ge=0, description="Start offset into the extracted text")
    end: int = Field(description="End offset (exclusive) into the extracted text")


class ChunkRecord(BaseModel):
    """Chunk row ready for upsert, keyed by (team_id, document_id, chunk_index)."""

    team_id: UUID
    document_id: UUID
    chunk_index: int = Field(ge=0)
    content: str
    chunk_start: int
    chunk_end: int
    embedding: list[float]
    doc_category: str = "other"
    doc_type: str | None = None
    sensitivity_level: str = "general"
    ai_classification: dict[str, Any] = Field(default_factory=dict)
    file_name: str
    original_filename: str
    mime_type: str
    file_size: int
    storage_path: str
    uploaded_by: UUID
    upload_source: str = "local_upload"
    sync_status: str = "active"
    file_modified_at: datetime
    last_synced_at: datetime


def build_chunk_records(
    chunks: list[SegmentedChunk],
    embeddings: list[list[float]],
    **document_fields: Any,
) -> list[ChunkRecord]:
    """
    Join segmenter output with embedding vectors by position.

    Args:
        chunks: Segmenter output in document order
        embeddings: Vectors in the same order as chunks
        **document_fields: Fields shared by every row of the document

    Returns:
        list[ChunkRecord]: One record per chunk

    Raises:
        ValueError: When the two sequences differ in length
    """
    if len(chunks) != len(embeddings):
        raise ValueError(
            f"Chunk/embedding count mismatch: {len(chunks)} chunks, {len(embeddings)} embeddings"
        )

    return [
        ChunkRecord(
            chunk_index=chunk.index,
            content=chunk.content,
            chunk_start=chunk.start,
            chunk_end=chunk.end,
            embedding=embedding,
            **document_fields,
        )
        for chunk, embedding in zip(chunks, embeddings)
    ]
