"""Tests for text extraction from uploaded bytes."""

import os
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.documents import Document

from astra.core.document_processing.models.ingest_request import PDF_MIME_TYPE
from astra.core.document_processing.tasks import extraction_task
from astra.core.document_processing.tasks.extraction_task import ExtractionTask
from astra.core.exceptions import BadRequestError, ExtractionError


class TestTextDocuments:
    def test_plain_text_is_decoded(self) -> None:
        text = ExtractionTask().extract("Quarterly goals\nShip v2".encode(), "text/plain")

        assert text == "Quarterly goals\nShip v2"

    def test_byte_order_mark_is_dropped(self) -> None:
        text = ExtractionTask().extract("\ufeff# Notes".encode("utf-8"), "text/markdown")

        assert text == "# Notes"

    def test_invalid_utf8_raises_extraction_error(self) -> None:
        with pytest.raises(ExtractionError) as exc_info:
            ExtractionTask().extract(b"\xff\xfe\xfa", "text/plain", document_id="doc-1")

        assert exc_info.value.details["mime_type"] == "text/plain"
        assert exc_info.value.details["document_id"] == "doc-1"


class TestLoaderDocuments:
    def test_pages_are_joined_with_separator(self) -> None:
        loader_cls = MagicMock()
        loader_cls.return_value.load.return_value = [
            Document(page_content="Page one"),
            Document(page_content="Page two"),
        ]

        with patch.dict(extraction_task._LOADERS, {PDF_MIME_TYPE: (loader_cls, ".pdf", "PDF")}):
            text = ExtractionTask().extract(b"%PDF-1.4", PDF_MIME_TYPE)

        assert text == "Page one\n\nPage two"
        local_path = loader_cls.call_args.args[0]
        assert local_path.endswith("document.pdf")

    def test_staged_file_is_removed_after_loading(self) -> None:
        seen_paths: list[str] = []

        def loader_cls(path: str):
            seen_paths.append(path)
            loader = MagicMock()
            loader.load.return_value = [Document(page_content="text")]
            return loader

        with patch.dict(extraction_task._LOADERS, {PDF_MIME_TYPE: (loader_cls, ".pdf", "PDF")}):
            ExtractionTask().extract(b"%PDF-1.4", PDF_MIME_TYPE)

        assert not os.path.exists(seen_paths[0])

    def test_loader_failure_raises_extraction_error(self) -> None:
        loader_cls = MagicMock()
        loader_cls.return_value.load.side_effect = RuntimeError("file has not been decrypted")

        with patch.dict(extraction_task._LOADERS, {PDF_MIME_TYPE: (loader_cls, ".pdf", "PDF")}):
            with pytest.raises(ExtractionError) as exc_info:
                ExtractionTask().extract(b"%PDF-1.4", PDF_MIME_TYPE)

        assert "password-protected" in exc_info.value.message
        assert exc_info.value.status_code == 500

    def test_corrupt_pdf_raises_extraction_error(self) -> None:
        with pytest.raises(ExtractionError):
            ExtractionTask().extract(b"this is not a pdf", PDF_MIME_TYPE)


def test_unsupported_mime_type_is_bad_request() -> None:
    with pytest.raises(BadRequestError) as exc_info:
        ExtractionTask().extract(b"GIF89a", "image/gif")

    assert exc_info.value.status_code == 400
    assert exc_info.value.details["field"] == "mimeType"
