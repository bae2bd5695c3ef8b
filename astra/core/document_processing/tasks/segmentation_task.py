"""
Text segmentation task.

Splits extracted text into overlapping, size-bounded chunks that end at
sentence or line boundaries where one lies in the back half of the window.

Dependencies: pydantic (models)
System role: Segmentation stage of document ingestion pipeline
"""

from astra.core.exceptions import EmptyContentError

from ..models import SegmentedChunk

_BREAK_CHARS = (".", "\n")


def segment_text(text: str, chunk_size: int = 1500, overlap: int = 200) -> list[SegmentedChunk]:
    """
    Split text into overlapping chunks with character offsets.

    Each window is proposed as [start, start + chunk_size). When the window
    stops short of the end of text it is pulled back to just after the last
    period or newline inside it, provided that break lies past the window's
    midpoint. The next window starts `overlap` characters before the previous
    end. Offsets refer to the untrimmed text; content is trimmed and empty
    slices are dropped without consuming an index.

    Args:
        text: Extracted document text (non-empty)
        chunk_size: Nominal window size in characters
        overlap: Characters shared by adjacent chunks

    Returns:
        list[SegmentedChunk]: Chunks with dense 0-based indices in document order

    Raises:
        ValueError: Invalid sizes or empty text
    """
    if overlap < 0 or chunk_size <= overlap:
        raise ValueError(f"Require chunk_size > overlap >= 0 (got {chunk_size}, {overlap})")
    if not text:
        raise ValueError("Cannot segment empty text")

    length = len(text)
    chunks: list[SegmentedChunk] = []
    start = 0

    while start < length:
        end = min(start + chunk_size, length)

        if end < length:
            break_point = max(text.rfind(char, start, end) for char in _BREAK_CHARS)
            if break_point > start + chunk_size / 2:
                end = break_point + 1

        content = text[start:end].strip()
        if content:
            chunks.append(
                SegmentedChunk(index=len(chunks), content=content, start=start, end=end)
            )

        if end >= length:
            break
        start = max(end - overlap, start + 1)

    return chunks


class SegmentationTask:
    """Split extracted text into chunks using the configured window."""

    def __init__(self, chunk_size: int = 1500, chunk_overlap: int = 200) -> None:
        """
        Initialize segmentation task with window configuration.

        Args:
            chunk_size: Nominal chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValueError: When chunk_size <= chunk_overlap or overlap is negative
        """
        if chunk_overlap < 0 or chunk_size <= chunk_overlap:
            raise ValueError("chunk_size must be greater than chunk_overlap >= 0")

        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    def chunk(self, text: str, document_id: str | None = None) -> list[SegmentedChunk]:
        """
        Split text into chunks.

        Args:
            text: Extracted document text
            document_id: Document ID for error context

        Returns:
            list[SegmentedChunk]: Ordered chunks

        Raises:
            EmptyContentError: When the text holds nothing but whitespace
        """
        if not text or not text.strip():
            raise EmptyContentError(
                "No text content could be extracted from the file",
                document_id=document_id,
            )

        chunks = segment_text(text, self._chunk_size, self._chunk_overlap)
        if not chunks:
            raise EmptyContentError(
                "No text content could be extracted from the file",
                document_id=document_id,
            )
        return chunks
