"""
Document ingestion API endpoints.

Routes:
- POST /documents/process - Ingest an uploaded document into the chunk store

Dependencies: astra.core.document_processing, astra.api.deps
System role: Document ingestion HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from astra.api.deps import ensure_team_member, get_authenticated_user_id, get_document_pipeline
from astra.boundary.db import get_async_db
from astra.core.document_processing.entrypoint import DocumentPipeline
from astra.core.document_processing.models import IngestRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


class ProcessDocumentResponse(BaseModel):
    """Successful ingestion response, camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    document_id: str = Field(alias="documentId")
    chunk_count: int = Field(alias="chunkCount")
    character_count: int = Field(alias="characterCount")


@router.post("/process", response_model=ProcessDocumentResponse)
async def process_document(
    request: IngestRequest,
    user_id: UUID = Depends(get_authenticated_user_id),
    db: AsyncSession = Depends(get_async_db),
    pipeline: DocumentPipeline = Depends(get_document_pipeline),
) -> ProcessDocumentResponse:
    """
    Extract, chunk, embed and store an uploaded document.

    Args:
        request: Upload metadata (storage path, mime type, team, user)
        user_id: Authenticated caller
        db: Async database session for the team check
        pipeline: Injected ingestion pipeline

    Returns:
        ProcessDocumentResponse: Document id with chunk and character counts

    Raises:
        AuthError: Missing/invalid token (401) or team mismatch (403)
        AstraException: Pipeline failure, rendered by the app's handlers
    """
    await ensure_team_member(db, user_id, request.team_id)

    result = await pipeline.process(request)

    logger.info(
        f"{__name__}:process_document - Document processed",
        extra={
            "document_id": result.document_id,
            "chunk_count": result.chunk_count,
            "notification": result.notification.status.value,
        },
    )

    return ProcessDocumentResponse(
        document_id=result.document_id,
        chunk_count=result.chunk_count,
        character_count=result.character_count,
    )
