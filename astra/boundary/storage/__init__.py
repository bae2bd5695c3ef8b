"""Object store adapter."""

from astra.boundary.storage.object_store_client import ObjectNotFoundError, ObjectStoreClient, ObjectStoreError

__all__ = ["ObjectStoreClient", "ObjectStoreError", "ObjectNotFoundError"]
