"""Tests for ChunkStoreTask validation and transaction handling."""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from astra.core.document_processing.models import ChunkRecord
from astra.core.document_processing.tasks.chunk_store_task import ChunkStoreTask
from astra.core.exceptions import StorageWriteError

TEAM_ID = uuid.uuid4()
DOCUMENT_ID = uuid.uuid4()


def _records(count: int, team_id=TEAM_ID, document_id=DOCUMENT_ID) -> list[ChunkRecord]:
    now = datetime.now(timezone.utc)
    return [
        ChunkRecord(
            team_id=team_id,
            document_id=document_id,
            chunk_index=i,
            content=f"chunk {i}",
            chunk_start=i * 5,
            chunk_end=i * 5 + 8,
            embedding=[0.1, 0.2],
            file_name="a.pdf",
            original_filename="a.pdf",
            mime_type="application/pdf",
            file_size=10,
            storage_path="team/a.pdf",
            uploaded_by=uuid.uuid4(),
            file_modified_at=now,
            last_synced_at=now,
        )
        for i in range(count)
    ]


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def session_factory(session: AsyncMock) -> MagicMock:
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory


@pytest.fixture
def crud() -> MagicMock:
    crud = MagicMock()
    crud.upsert_many = AsyncMock(side_effect=lambda session, rows: len(rows))
    crud.delete_from_index = AsyncMock(return_value=0)
    crud.mark_superseded = AsyncMock(return_value=0)
    return crud


class TestUpsertChunks:
    async def test_writes_in_sub_batches_then_commits(self, session_factory, session, crud) -> None:
        task = ChunkStoreTask(session_factory, write_batch_size=2, crud=crud)

        written = await task.upsert_chunks(TEAM_ID, DOCUMENT_ID, _records(5))

        assert written == 5
        batch_sizes = [len(call.args[1]) for call in crud.upsert_many.await_args_list]
        assert batch_sizes == [2, 2, 1]
        crud.delete_from_index.assert_awaited_once_with(session, TEAM_ID, DOCUMENT_ID, 5)
        crud.mark_superseded.assert_awaited_once_with(session, TEAM_ID, "team/a.pdf", DOCUMENT_ID)
        session.commit.assert_awaited_once()

    async def test_rows_carry_generated_ids_and_record_fields(self, session_factory, crud) -> None:
        task = ChunkStoreTask(session_factory, crud=crud)

        await task.upsert_chunks(TEAM_ID, DOCUMENT_ID, _records(2))

        rows = crud.upsert_many.await_args.args[1]
        assert all(isinstance(row["id"], uuid.UUID) for row in rows)
        assert [row["chunk_index"] for row in rows] == [0, 1]
        assert rows[0]["embedding"] == [0.1, 0.2]

    async def test_database_error_rolls_back(self, session_factory, session, crud) -> None:
        crud.upsert_many.side_effect = OperationalError("INSERT", {}, Exception("disk full"))
        task = ChunkStoreTask(session_factory, crud=crud)

        with pytest.raises(StorageWriteError) as exc_info:
            await task.upsert_chunks(TEAM_ID, DOCUMENT_ID, _records(2))

        session.rollback.assert_awaited_once()
        session.commit.assert_not_called()
        assert exc_info.value.details["operation"] == "upsert"
        assert exc_info.value.status_code == 500


class TestRecordValidation:
    async def test_empty_records_raise(self, session_factory, crud) -> None:
        with pytest.raises(ValueError):
            await ChunkStoreTask(session_factory, crud=crud).upsert_chunks(TEAM_ID, DOCUMENT_ID, [])

    async def test_gap_in_indices_raises(self, session_factory, crud) -> None:
        records = _records(3)
        del records[1]

        with pytest.raises(ValueError):
            await ChunkStoreTask(session_factory, crud=crud).upsert_chunks(
                TEAM_ID, DOCUMENT_ID, records
            )
        crud.upsert_many.assert_not_called()

    async def test_foreign_document_raises(self, session_factory, crud) -> None:
        records = _records(2, document_id=uuid.uuid4())

        with pytest.raises(ValueError):
            await ChunkStoreTask(session_factory, crud=crud).upsert_chunks(
                TEAM_ID, DOCUMENT_ID, records
            )

    def test_invalid_write_batch_size(self, session_factory) -> None:
        with pytest.raises(ValueError):
            ChunkStoreTask(session_factory, write_batch_size=0)


async def test_delete_document_commits(session_factory, session, crud) -> None:
    crud.delete_by_document = AsyncMock(return_value=4)

    deleted = await ChunkStoreTask(session_factory, crud=crud).delete_document(TEAM_ID, DOCUMENT_ID)

    assert deleted == 4
    session.commit.assert_awaited_once()
