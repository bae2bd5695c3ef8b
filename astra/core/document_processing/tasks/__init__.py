"""
Task modules for document processing pipeline.

Exports: StorageDownloadTask, ExtractionTask, SegmentationTask, EmbeddingTask,
ChunkStoreTask, ClassifierNotifyTask, segment_text
"""

from .chunk_store_task import ChunkStoreTask
from .classifier_notify_task import ClassifierNotifyTask
from .embedding_task import EmbeddingTask
from .extraction_task import ExtractionTask
from .segmentation_task import SegmentationTask, segment_text
from .storage_download_task import StorageDownloadTask

__all__ = [
    "StorageDownloadTask",
    "ExtractionTask",
    "SegmentationTask",
    "segment_text",
    "EmbeddingTask",
    "ChunkStoreTask",
    "ClassifierNotifyTask",
]
