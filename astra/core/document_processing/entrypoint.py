"""
Document pipeline orchestrator.

Coordinates object store download, text extraction, segmentation,
embedding, chunk upsert and classifier notification for one document.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone
from uuid import UUID

from astra.core.exceptions import AstraException, BadRequestError
from astra.observability.log_utils import log_with_context

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .models import (
    SUPPORTED_MIME_TYPES,
    IngestRequest,
    PipelineResult,
    PipelineState,
    build_chunk_records,
)
from .tasks import (
    ChunkStoreTask,
    ClassifierNotifyTask,
    EmbeddingTask,
    ExtractionTask,
    SegmentationTask,
    StorageDownloadTask,
)

logger = logging.getLogger(__name__)


class DocumentPipeline:
    """Orchestrate ingestion: download -> extract -> segment -> embed -> store -> notify."""

    def __init__(
        self,
        settings: DocumentPipelineSettings | None = None,
        *,
        download_task: StorageDownloadTask | None = None,
        extraction_task: ExtractionTask | None = None,
        segmentation_task: SegmentationTask | None = None,
        embedding_task: EmbeddingTask | None = None,
        chunk_store_task: ChunkStoreTask | None = None,
        notify_task: ClassifierNotifyTask | None = None,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Tasks not passed in are built from settings.

        Args:
            settings: Pipeline settings (uses defaults if None)
            download_task: Object store download stage
            extraction_task: Text extraction stage
            segmentation_task: Chunking stage
            embedding_task: Embedding provider stage
            chunk_store_task: Chunk persistence stage
            notify_task: Classifier notification stage
        """
        self._settings = settings or get_pipeline_settings()

        self._download_task = download_task or self._build_download_task()
        self._extraction_task = extraction_task or ExtractionTask()
        self._segmentation_task = segmentation_task or SegmentationTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
        )
        self._embedding_task = embedding_task or EmbeddingTask(
            api_key=self._settings.embedding_api_key,
            model=self._settings.embedding_model,
            base_url=self._settings.embedding_base_url,
            batch_size=self._settings.embedding_batch_size,
            max_retries=self._settings.embedding_max_retries,
            initial_delay=self._settings.embedding_initial_delay,
            timeout=self._settings.embedding_timeout,
        )
        self._chunk_store_task = chunk_store_task or self._build_chunk_store_task()
        self._notify_task = notify_task or ClassifierNotifyTask(
            webhook_url=self._settings.classifier_webhook_url,
            trigger_source=self._settings.classifier_trigger_source,
            timeout=self._settings.classifier_timeout,
        )

    @property
    def chunk_store(self) -> ChunkStoreTask:
        return self._chunk_store_task

    async def process(
        self,
        request: IngestRequest,
        document_id: UUID | None = None,
    ) -> PipelineResult:
        """
        Process one uploaded document through the full pipeline.

        Re-running with the same document_id overwrites the earlier chunks.

        Args:
            request: Validated ingestion request
            document_id: Document ID to reuse (generated if None)

        Returns:
            PipelineResult: Chunk count, character count and notification outcome

        Raises:
            BadRequestError: Unsupported mime type or file too large
            StorageUnavailableError: Raw file missing or object store unreachable
            ExtractionError: Text extraction failed
            EmptyContentError: No usable text in the file
            EmbeddingProviderError: Embedding failed; nothing persisted
            StorageWriteError: Chunk upsert failed
        """
        start_time = time.perf_counter()
        doc_id = document_id or uuid.uuid4()
        doc_id_str = str(doc_id)
        state = PipelineState.RECEIVED
        self._log_state(state, doc_id_str, storage_path=request.storage_path)

        try:
            self._validate_request(request)

            data = await self._download_task.download(request.storage_path, doc_id_str)
            self._check_file_size(len(data))

            text = await asyncio.to_thread(
                self._extraction_task.extract, data, request.mime_type, doc_id_str
            )
            state = PipelineState.EXTRACTED
            self._log_state(state, doc_id_str, character_count=len(text))

            chunks = self._segmentation_task.chunk(text, doc_id_str)
            state = PipelineState.SEGMENTED
            self._log_state(state, doc_id_str, chunk_count=len(chunks))

            embeddings = await self._embedding_task.embed_batch(
                [chunk.content for chunk in chunks]
            )
            state = PipelineState.EMBEDDED
            self._log_state(state, doc_id_str)

            now = datetime.now(timezone.utc)
            records = build_chunk_records(
                chunks,
                embeddings,
                team_id=request.team_id,
                document_id=doc_id,
                doc_category=request.doc_category,
                file_name=request.sanitized_filename,
                original_filename=request.filename,
                mime_type=request.mime_type,
                file_size=len(data),
                storage_path=request.storage_path,
                uploaded_by=request.user_id,
                file_modified_at=now,
                last_synced_at=now,
            )
            written = await self._chunk_store_task.upsert_chunks(
                request.team_id, doc_id, records
            )
            state = PipelineState.STORED
            self._log_state(state, doc_id_str, chunk_count=written)

        except AstraException as e:
            e.details.setdefault("stage", state.value)
            logger.error(
                f"{__name__}:process - Pipeline failed during {state.value}: {e.message}",
                extra={
                    "document_id": doc_id_str,
                    "state": PipelineState.FAILED.value,
                    "error_type": type(e).__name__,
                },
            )
            raise

        notification = await self._notify_task.notify(
            str(request.team_id), doc_id_str, request.sanitized_filename
        )
        state = PipelineState.NOTIFIED
        self._log_state(state, doc_id_str, notification=notification.status.value)

        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return PipelineResult(
            document_id=doc_id_str,
            chunk_count=written,
            character_count=len(text),
            state=state,
            notification=notification,
            processing_time_ms=elapsed_ms,
        )

    def _validate_request(self, request: IngestRequest) -> None:
        """Reject requests that cannot succeed before any I/O happens."""
        if request.mime_type not in SUPPORTED_MIME_TYPES:
            raise BadRequestError(
                "Unsupported file type for direct processing",
                field="mimeType",
                details={"mime_type": request.mime_type},
            )
        if request.file_size is not None:
            self._check_file_size(request.file_size)

    def _check_file_size(self, size: int) -> None:
        limit = self._settings.max_file_size_bytes
        if size > limit:
            raise BadRequestError(
                f"File too large. Maximum size is {limit // (1024 * 1024)}MB",
                field="fileSize",
                details={"file_size": size, "max_file_size": limit},
            )

    def _build_download_task(self) -> StorageDownloadTask:
        from astra.boundary.storage import ObjectStoreClient
        from astra.configs import get_settings

        storage = get_settings().storage
        return StorageDownloadTask(
            ObjectStoreClient(
                bucket=storage.bucket,
                region=storage.region,
                endpoint_url=storage.endpoint_url,
                access_key_id=storage.access_key_id,
                secret_access_key=storage.secret_access_key,
            )
        )

    def _build_chunk_store_task(self) -> ChunkStoreTask:
        from astra.boundary.db import get_async_session_factory

        return ChunkStoreTask(
            get_async_session_factory(),
            write_batch_size=self._settings.write_batch_size,
        )

    @staticmethod
    def _log_state(state: PipelineState, document_id: str, **context) -> None:
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:process - State {state.value}",
            document_id=document_id,
            state=state.value,
            **context,
        )
