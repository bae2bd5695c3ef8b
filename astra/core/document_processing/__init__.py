"""
Document processing pipeline.

Exports: DocumentPipeline, DocumentPipelineSettings, get_pipeline_settings
"""

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .entrypoint import DocumentPipeline

__all__ = ["DocumentPipeline", "DocumentPipelineSettings", "get_pipeline_settings"]
