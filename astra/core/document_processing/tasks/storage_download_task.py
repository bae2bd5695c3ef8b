"""
Object store download task.

Fetches the raw uploaded bytes for one document.

Dependencies: astra.boundary.storage (boto3)
System role: First stage of document ingestion pipeline
"""

import asyncio
import logging

from astra.boundary.storage import ObjectNotFoundError, ObjectStoreClient, ObjectStoreError
from astra.core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


class StorageDownloadTask:
    """Download raw document bytes from the object store."""

    def __init__(self, client: ObjectStoreClient) -> None:
        """
        Initialize download task.

        Args:
            client: Object store client bound to the uploads bucket
        """
        self._client = client

    async def download(self, storage_path: str, document_id: str | None = None) -> bytes:
        """
        Download a document's raw bytes.

        boto3 is blocking, so the call runs in a worker thread.

        Args:
            storage_path: Object key inside the uploads bucket
            document_id: Document ID for error context

        Returns:
            bytes: Raw file contents

        Raises:
            StorageUnavailableError: Object missing (404) or store unreachable
        """
        try:
            data = await asyncio.to_thread(self._client.download, storage_path)
        except ObjectNotFoundError as e:
            logger.error(
                f"{__name__}:download - Object not found",
                extra={"storage_path": storage_path},
            )
            raise StorageUnavailableError(
                "File not found in storage. Please re-upload.",
                document_id=document_id,
                details={"storage_path": storage_path},
                status_code=404,
            ) from e
        except ObjectStoreError as e:
            logger.error(f"{__name__}:download - ObjectStoreError: {e}")
            raise StorageUnavailableError(
                "Object store unavailable",
                document_id=document_id,
                details={"storage_path": storage_path},
            ) from e

        logger.info(
            f"{__name__}:download - Downloaded file",
            extra={"storage_path": storage_path, "size_bytes": len(data)},
        )
        return data
