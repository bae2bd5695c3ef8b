"""
Document chunk CRUD operations.

Upsert keyed on (team_id, document_id, chunk_index) using the dialect's
INSERT ... ON CONFLICT DO UPDATE, plus the lifecycle operations that keep
a document's chunk set consistent (stale-tail trim, supersede, delete).

Dependencies: sqlalchemy, astra.boundary.db.models
System role: Chunk persistence operations
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from astra.boundary.db.base import utcnow
from astra.boundary.db.models.document_chunk_model import DocumentChunkModel, SyncStatus

_INSERT_BY_DIALECT = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}

CONFLICT_COLUMNS = ("team_id", "document_id", "chunk_index")

# Columns never overwritten when an existing row is replaced
_IMMUTABLE_COLUMNS = frozenset({"id", "created_at", *CONFLICT_COLUMNS})


class DocumentChunkCRUD:
    """CRUD operations for DocumentChunkModel."""

    def __init__(self) -> None:
        self.model = DocumentChunkModel

    async def upsert_many(self, session: AsyncSession, rows: list[dict[str, Any]]) -> int:
        """
        Insert rows, replacing any row that already holds the same key.

        Args:
            session: Async database session (caller commits)
            rows: Column-name keyed row dicts

        Returns:
            int: Number of rows written

        Raises:
            ValueError: Dialect has no ON CONFLICT support wired in
        """
        if not rows:
            return 0

        dialect_name = session.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect_name)
        if insert is None:
            raise ValueError(f"Upsert not supported for dialect: {dialect_name}")

        now = utcnow()
        values = [{"created_at": now, "updated_at": now, **row} for row in rows]

        stmt = insert(self.model).values(values)
        stmt = stmt.on_conflict_do_update(
            index_elements=list(CONFLICT_COLUMNS),
            set_={
                column.name: stmt.excluded[column.name]
                for column in self.model.__table__.columns
                if column.name not in _IMMUTABLE_COLUMNS
            },
        )
        await session.execute(stmt)
        return len(values)

    async def delete_from_index(
        self,
        session: AsyncSession,
        team_id: UUID,
        document_id: UUID,
        first_index: int,
    ) -> int:
        """
        Delete a document's chunks at or beyond first_index.

        Removes the tail left behind when a re-ingestion produces fewer chunks.

        Returns:
            int: Number of rows deleted
        """
        stmt = delete(self.model).where(
            self.model.team_id == team_id,
            self.model.document_id == document_id,
            self.model.chunk_index >= first_index,
        )
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def mark_superseded(
        self,
        session: AsyncSession,
        team_id: UUID,
        storage_path: str,
        current_document_id: UUID,
    ) -> int:
        """
        Mark active chunks of older ingestions of the same source file as superseded.

        Returns:
            int: Number of rows updated
        """
        stmt = (
            update(self.model)
            .where(
                self.model.team_id == team_id,
                self.model.storage_path == storage_path,
                self.model.document_id != current_document_id,
                self.model.sync_status == SyncStatus.ACTIVE.value,
            )
            .values(sync_status=SyncStatus.SUPERSEDED.value, updated_at=utcnow())
        )
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def get_by_document(
        self,
        session: AsyncSession,
        team_id: UUID,
        document_id: UUID,
    ) -> Sequence[DocumentChunkModel]:
        """
        Get a document's chunks in chunk_index order.

        Returns:
            Sequence[DocumentChunkModel]: Chunk rows
        """
        stmt = (
            select(self.model)
            .where(self.model.team_id == team_id, self.model.document_id == document_id)
            .order_by(self.model.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_document(
        self,
        session: AsyncSession,
        team_id: UUID,
        document_id: UUID,
    ) -> int:
        """Count a document's chunk rows."""
        stmt = select(func.count()).select_from(self.model).where(
            self.model.team_id == team_id,
            self.model.document_id == document_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one()

    async def delete_by_document(
        self,
        session: AsyncSession,
        team_id: UUID,
        document_id: UUID,
    ) -> int:
        """
        Delete every chunk of a document.

        Returns:
            int: Number of rows deleted
        """
        stmt = delete(self.model).where(
            self.model.team_id == team_id,
            self.model.document_id == document_id,
        )
        result = await session.execute(stmt)
        return result.rowcount or 0


document_chunk_crud = DocumentChunkCRUD()
