"""
Configuration settings for document processing pipeline.

Provides environment-based configuration for segmentation, embedding,
chunk storage and classifier notification.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Segmentation settings
    chunk_size: int = Field(
        default=1500,
        description="Nominal chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        description="Overlap between consecutive chunks",
    )

    # Embedding provider settings
    embedding_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible embeddings API base URL",
    )
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model ID (1536 dimensions)",
    )
    embedding_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("DOC_PIPELINE_EMBEDDING_API_KEY", "OPENAI_API_KEY"),
        description="Bearer token for the embedding provider",
    )
    embedding_batch_size: int = Field(
        default=100,
        description="Maximum texts per provider request",
    )
    embedding_max_retries: int = Field(
        default=3,
        description="Retries after the first attempt when rate limited (HTTP 429)",
    )
    embedding_initial_delay: float = Field(
        default=1.0,
        description="First backoff delay in seconds, doubled on every retry",
    )
    embedding_timeout: float = Field(
        default=60.0,
        description="Per-request timeout for embedding calls in seconds",
    )

    # Chunk store settings
    write_batch_size: int = Field(
        default=500,
        description="Rows per INSERT statement when upserting chunks",
    )

    # Request validation
    max_file_size_bytes: int = Field(
        default=50 * 1024 * 1024,
        description="Largest accepted upload (50 MB)",
    )

    # Downstream classifier webhook (n8n)
    classifier_webhook_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "DOC_PIPELINE_CLASSIFIER_WEBHOOK_URL",
            "N8N_BACKGROUND_CLASSIFIER_WEBHOOK",
        ),
        description="Best-effort classifier webhook; skipped when unset",
    )
    classifier_timeout: float = Field(
        default=10.0,
        description="Webhook request timeout in seconds",
    )
    classifier_trigger_source: str = Field(
        default="local_upload_pdf",
        description="trigger_source value sent to the classifier",
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
