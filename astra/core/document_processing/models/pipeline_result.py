"""
Pipeline state and result models for document processing.

Dependencies: pydantic
System role: Return type for DocumentPipeline.process()
"""

from enum import Enum

from pydantic import BaseModel, Field


class PipelineState(str, Enum):
    """Observable states of one ingestion attempt."""

    RECEIVED = "received"
    EXTRACTED = "extracted"
    SEGMENTED = "segmented"
    EMBEDDED = "embedded"
    STORED = "stored"
    NOTIFIED = "notified"
    FAILED = "failed"


class NotificationStatus(str, Enum):
    """Outcome of the best-effort classifier notification."""

    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class NotificationResult(BaseModel):
    """Side-channel result, independent of the pipeline's success."""

    status: NotificationStatus
    error: str | None = None


class PipelineResult(BaseModel):
    """Result of document processing pipeline execution."""

    document_id: str = Field(description="Unique document identifier")
    chunk_count: int = Field(description="Number of chunks stored")
    character_count: int = Field(description="Length of the extracted text")
    state: PipelineState = Field(default=PipelineState.NOTIFIED)
    notification: NotificationResult
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
