"""
Models for document processing pipeline.

Exports: SegmentedChunk, ChunkRecord, IngestRequest, PipelineResult,
PipelineState, NotificationResult, NotificationStatus
"""

from .chunk import ChunkRecord, SegmentedChunk, build_chunk_records
from .ingest_request import SUPPORTED_MIME_TYPES, IngestRequest, sanitize_filename
from .pipeline_result import (
    NotificationResult,
    NotificationStatus,
    PipelineResult,
    PipelineState,
)

__all__ = [
    "SegmentedChunk",
    "ChunkRecord",
    "build_chunk_records",
    "IngestRequest",
    "SUPPORTED_MIME_TYPES",
    "sanitize_filename",
    "PipelineResult",
    "PipelineState",
    "NotificationResult",
    "NotificationStatus",
]
