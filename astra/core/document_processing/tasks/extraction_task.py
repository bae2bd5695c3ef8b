"""
Text extraction task using LangChain document loaders.

Converts raw PDF / Word bytes into plain text; plain text and markdown
are decoded directly.

Dependencies: langchain_community.document_loaders (pypdf, docx2txt)
System role: Extraction stage of document ingestion pipeline
"""

import os
import shutil
import tempfile

from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader
from langchain_core.documents import Document

from astra.core.exceptions import BadRequestError, ExtractionError

from ..models.ingest_request import (
    DOCX_MIME_TYPE,
    MSWORD_MIME_TYPE,
    PDF_MIME_TYPE,
    TEXT_MIME_TYPES,
)

_LOADERS = {
    PDF_MIME_TYPE: (PyPDFLoader, ".pdf", "PDF"),
    DOCX_MIME_TYPE: (Docx2txtLoader, ".docx", "Word document"),
    MSWORD_MIME_TYPE: (Docx2txtLoader, ".doc", "Word document"),
}


class ExtractionTask:
    """Extract plain text from uploaded document bytes."""

    def __init__(self, page_separator: str = "\n\n") -> None:
        """
        Initialize extraction task.

        Args:
            page_separator: Joins the text of consecutive pages
        """
        self._page_separator = page_separator

    def extract(self, data: bytes, mime_type: str, document_id: str | None = None) -> str:
        """
        Extract text from document bytes.

        Loaders read from disk, so the bytes are staged in a temp directory
        that is removed afterwards.

        Args:
            data: Raw file contents
            mime_type: Declared MIME type
            document_id: Document ID for error context

        Returns:
            str: Extracted text (may be empty or whitespace)

        Raises:
            BadRequestError: Unsupported MIME type
            ExtractionError: Corrupted, protected or undecodable file
        """
        if mime_type in TEXT_MIME_TYPES:
            try:
                return data.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise ExtractionError(
                    "Unable to decode text file as UTF-8",
                    document_id=document_id,
                    mime_type=mime_type,
                ) from e

        if mime_type not in _LOADERS:
            raise BadRequestError(
                "Unsupported file type for direct processing",
                field="mimeType",
                details={"mime_type": mime_type},
            )

        loader_cls, suffix, label = _LOADERS[mime_type]
        temp_dir = tempfile.mkdtemp(prefix="astra_ingest_")
        local_path = os.path.join(temp_dir, f"document{suffix}")

        try:
            with open(local_path, "wb") as f:
                f.write(data)
            documents: list[Document] = loader_cls(local_path).load()
        except Exception as e:
            raise ExtractionError(
                f"Unable to extract text from {label}. File may be corrupted or password-protected.",
                document_id=document_id,
                mime_type=mime_type,
                details={"reason": str(e)},
            ) from e
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

        return self._page_separator.join(doc.page_content for doc in documents)
