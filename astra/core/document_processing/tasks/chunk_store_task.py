"""
Chunk store task.

Persists a document's chunk records with upsert semantics on
(team_id, document_id, chunk_index), so re-running ingestion for the same
document converges on the same rows instead of duplicating them.

Dependencies: sqlalchemy, astra.boundary.db
System role: Storage stage of document ingestion pipeline
"""

import logging
import uuid
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from astra.boundary.db.CRUD.document_chunk_crud import DocumentChunkCRUD, document_chunk_crud
from astra.boundary.db.models.document_chunk_model import DocumentChunkModel
from astra.core.exceptions import StorageWriteError

from ..models import ChunkRecord

logger = logging.getLogger(__name__)


class ChunkStoreTask:
    """Write, read and delete a document's chunk rows."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        write_batch_size: int = 500,
        crud: DocumentChunkCRUD = document_chunk_crud,
    ) -> None:
        """
        Initialize chunk store task.

        Args:
            session_factory: Async session factory for the relational store
            write_batch_size: Rows per INSERT statement
            crud: Chunk CRUD operations

        Raises:
            ValueError: When write_batch_size < 1
        """
        if write_batch_size < 1:
            raise ValueError("write_batch_size must be at least 1")

        self._session_factory = session_factory
        self._write_batch_size = write_batch_size
        self._crud = crud

    async def upsert_chunks(
        self,
        team_id: UUID,
        document_id: UUID,
        records: list[ChunkRecord],
    ) -> int:
        """
        Upsert a document's full chunk set in one transaction.

        Within the same transaction, rows of this document beyond the new
        chunk count are deleted and older active ingestions of the same
        storage path are marked superseded.

        Args:
            team_id: Owning team
            document_id: Owning document
            records: One record per chunk, indices 0..N-1

        Returns:
            int: Number of rows written

        Raises:
            ValueError: Records empty, not dense, or not owned by team/document
            StorageWriteError: Database failure (transaction rolled back)
        """
        self._validate_records(team_id, document_id, records)

        rows = [{"id": uuid.uuid4(), **record.model_dump()} for record in records]
        storage_paths = sorted({record.storage_path for record in records})

        async with self._session_factory() as session:
            try:
                written = 0
                for offset in range(0, len(rows), self._write_batch_size):
                    written += await self._crud.upsert_many(
                        session, rows[offset : offset + self._write_batch_size]
                    )

                trimmed = await self._crud.delete_from_index(
                    session, team_id, document_id, len(rows)
                )
                superseded = 0
                for storage_path in storage_paths:
                    superseded += await self._crud.mark_superseded(
                        session, team_id, storage_path, document_id
                    )

                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    f"{__name__}:upsert_chunks - {type(e).__name__}: {e}",
                    extra={"document_id": str(document_id), "team_id": str(team_id)},
                )
                raise StorageWriteError(
                    "Failed to save document chunks",
                    document_id=str(document_id),
                    operation="upsert",
                    details={"reason": str(e)},
                ) from e

        logger.info(
            f"{__name__}:upsert_chunks - Chunks stored",
            extra={
                "document_id": str(document_id),
                "team_id": str(team_id),
                "written": written,
                "trimmed": trimmed,
                "superseded": superseded,
            },
        )
        return written

    async def get_document_chunks(
        self,
        team_id: UUID,
        document_id: UUID,
    ) -> list[DocumentChunkModel]:
        """
        Read a document's chunks in index order.

        Returns:
            list[DocumentChunkModel]: Chunk rows
        """
        async with self._session_factory() as session:
            return list(await self._crud.get_by_document(session, team_id, document_id))

    async def delete_document(self, team_id: UUID, document_id: UUID) -> int:
        """
        Delete every chunk of a document.

        Returns:
            int: Number of rows deleted

        Raises:
            StorageWriteError: Database failure (transaction rolled back)
        """
        async with self._session_factory() as session:
            try:
                deleted = await self._crud.delete_by_document(session, team_id, document_id)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise StorageWriteError(
                    "Failed to delete document chunks",
                    document_id=str(document_id),
                    operation="delete",
                    details={"reason": str(e)},
                ) from e

        logger.info(
            f"{__name__}:delete_document - Chunks deleted",
            extra={"document_id": str(document_id), "deleted": deleted},
        )
        return deleted

    @staticmethod
    def _validate_records(
        team_id: UUID,
        document_id: UUID,
        records: list[ChunkRecord],
    ) -> None:
        if not records:
            raise ValueError("No chunk records to store")

        for position, record in enumerate(records):
            if record.team_id != team_id or record.document_id != document_id:
                raise ValueError(
                    f"Chunk record {position} belongs to another team or document"
                )
            if record.chunk_index != position:
                raise ValueError(
                    f"Chunk indices must be dense and ordered: expected {position}, "
                    f"got {record.chunk_index}"
                )
