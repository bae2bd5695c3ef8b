"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: astra.configs, astra.core.document_processing, astra.boundary
System role: DI container for service injection
"""

import logging
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from astra.boundary.auth import SupabaseAuthClient
from astra.boundary.db import user_crud
from astra.configs import get_settings
from astra.core.exceptions import AuthError

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._document_pipeline = None
        self._auth_client = None

    @property
    def document_pipeline(self):
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            from astra.core.document_processing.entrypoint import DocumentPipeline
            self._document_pipeline = DocumentPipeline()
        return self._document_pipeline

    @property
    def auth_client(self) -> SupabaseAuthClient:
        """Get cached Supabase auth client."""
        if self._auth_client is None:
            auth = get_settings().auth
            self._auth_client = SupabaseAuthClient(
                project_url=auth.url,
                api_key=auth.service_role_key,
                timeout=auth.request_timeout,
            )
        return self._auth_client

    def clear(self) -> None:
        """Clear all cached instances."""
        self._document_pipeline = None
        self._auth_client = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_document_pipeline():
    """
    Get document ingestion pipeline.

    Returns:
        DocumentPipeline: Cached pipeline instance
    """
    return get_service_cache().document_pipeline


def get_auth_client() -> SupabaseAuthClient:
    """Get cached auth client."""
    return get_service_cache().auth_client


async def get_authenticated_user_id(
    authorization: str | None = Header(default=None),
    auth_client: SupabaseAuthClient = Depends(get_auth_client),
) -> UUID:
    """
    Resolve the request's bearer token to a user id.

    Args:
        authorization: Authorization header value
        auth_client: Injected auth client

    Returns:
        UUID: Authenticated user id

    Raises:
        AuthError: Header missing or token rejected (401)
    """
    if not authorization:
        raise AuthError("Missing authorization header")

    token = authorization.removeprefix("Bearer ").strip()
    if not token:
        raise AuthError("Missing authorization header")

    return await auth_client.get_user_id(token)


async def ensure_team_member(db: AsyncSession, user_id: UUID, team_id: UUID) -> None:
    """
    Check that the user belongs to the team named in the request.

    Raises:
        AuthError: User unknown or on another team (403)
    """
    user_team_id = await user_crud.get_team_id(db, user_id)
    if user_team_id != team_id:
        logger.warning(
            f"{__name__}:ensure_team_member - Team mismatch",
            extra={"user_id": str(user_id), "team_id": str(team_id)},
        )
        raise AuthError("Unauthorized - team mismatch", status_code=403)
