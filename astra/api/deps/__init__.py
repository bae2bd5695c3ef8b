"""FastAPI dependency providers."""

from .dependencies import (
    ServiceCache,
    ensure_team_member,
    get_auth_client,
    get_authenticated_user_id,
    get_document_pipeline,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_service_cache",
    "get_document_pipeline",
    "get_auth_client",
    "get_authenticated_user_id",
    "ensure_team_member",
]
