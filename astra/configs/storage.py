"""
Object storage configuration.

Settings for the S3-compatible bucket holding raw uploads
(Supabase Storage exposes an S3 endpoint for the `local-uploads` bucket).

Dependencies: pydantic_settings
System role: Object store configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ObjectStorageSettings(BaseSettings):
    """Settings for the raw document bucket."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="local-uploads",
        description="Bucket holding raw uploaded documents",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="S3-compatible endpoint (e.g. https://<project>.supabase.co/storage/v1/s3)",
    )
    region: str = Field(
        default="us-east-1",
        description="Region reported to the S3 endpoint",
    )
    access_key_id: str | None = Field(default=None, description="S3 access key id")
    secret_access_key: str | None = Field(default=None, description="S3 secret access key")
