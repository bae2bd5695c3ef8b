"""
S3-compatible object store client.

Reads raw uploads from the documents bucket. Supabase Storage
exposes the same S3 API, so boto3 talks to it through `endpoint_url`.

Dependencies: boto3
System role: Object store boundary for the ingestion pipeline
"""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class ObjectStoreError(Exception):
    """Raised when the object store cannot serve a request."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class ObjectNotFoundError(ObjectStoreError):
    """Raised when the requested object does not exist."""


class ObjectStoreClient:
    """Thin boto3 wrapper exposing whole-object downloads."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client=None,
    ) -> None:
        """
        Initialize object store client.

        Args:
            bucket: Bucket holding raw documents
            region: Region reported to the endpoint
            endpoint_url: S3-compatible endpoint (None for AWS S3)
            access_key_id: Optional explicit access key
            secret_access_key: Optional explicit secret key
            client: Pre-built boto3 S3 client (tests)
        """
        self._bucket = bucket
        self._s3_client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def download(self, key: str) -> bytes:
        """
        Download a whole object.

        Args:
            key: Object key inside the bucket

        Returns:
            bytes: Object body

        Raises:
            ObjectNotFoundError: Object does not exist
            ObjectStoreError: Any other storage failure
        """
        if not key:
            raise ObjectStoreError("Object key is required", key)

        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey", "NotFound"):
                raise ObjectNotFoundError(f"Object not found: {key}", key) from e
            logger.error(f"{__name__}:download - {error_code}", extra={"key": key})
            raise ObjectStoreError(f"Failed to download object: {e}", key) from e
        except BotoCoreError as e:
            raise ObjectStoreError(f"Object store unavailable: {e}", key) from e

