"""Tests for text segmentation into overlapping chunks."""

import pytest

from astra.core.document_processing.tasks.segmentation_task import SegmentationTask, segment_text
from astra.core.exceptions import EmptyContentError


def _sentences(count: int) -> str:
    return "".join(f"Sentence number {i} talks about quarterly planning. " for i in range(count))


class TestSegmentText:
    """Window placement, offsets and indexing."""

    def test_3200_chars_without_breaks_yields_three_windows(self) -> None:
        text = "a" * 3200

        chunks = segment_text(text, chunk_size=1500, overlap=200)

        assert [(c.start, c.end) for c in chunks] == [(0, 1500), (1300, 2800), (2600, 3200)]
        assert [c.index for c in chunks] == [0, 1, 2]

    def test_short_text_yields_single_chunk(self) -> None:
        text = "Board minutes for March."

        chunks = segment_text(text)

        assert len(chunks) == 1
        assert chunks[0].start == 0
        assert chunks[0].end == len(text)
        assert chunks[0].content == text

    def test_content_is_trimmed_but_offsets_are_not(self) -> None:
        chunks = segment_text("   hello world   ")

        assert chunks[0].content == "hello world"
        assert (chunks[0].start, chunks[0].end) == (0, 17)

    def test_break_in_back_half_ends_chunk_after_period(self) -> None:
        text = "x" * 1399 + "." + "y" * 2000

        chunks = segment_text(text, chunk_size=1500, overlap=200)

        assert chunks[0].end == 1400
        assert chunks[0].content.endswith(".")
        assert chunks[1].start == 1200

    def test_newline_counts_as_break(self) -> None:
        text = "x" * 1000 + "\n" + "y" * 2000

        chunks = segment_text(text, chunk_size=1500, overlap=200)

        assert chunks[0].end == 1001

    def test_break_in_front_half_is_ignored(self) -> None:
        text = "x" * 500 + "." + "y" * 2000

        chunks = segment_text(text, chunk_size=1500, overlap=200)

        assert chunks[0].end == 1500

    def test_indices_are_dense_and_ordered(self) -> None:
        chunks = segment_text(_sentences(300))

        assert [c.index for c in chunks] == list(range(len(chunks)))
        assert all(a.start < b.start for a, b in zip(chunks, chunks[1:]))

    def test_chunks_cover_whole_text(self) -> None:
        text = _sentences(300)

        chunks = segment_text(text)

        assert chunks[0].start == 0
        assert chunks[-1].end == len(text)
        for previous, current in zip(chunks, chunks[1:]):
            assert current.start <= previous.end
        for chunk in chunks:
            assert 0 <= chunk.start < chunk.end <= len(text)
            assert chunk.content == text[chunk.start : chunk.end].strip()

    def test_adjacent_chunks_overlap_by_configured_amount(self) -> None:
        chunks = segment_text(_sentences(300), chunk_size=1500, overlap=200)

        assert len(chunks) > 2
        for previous, current in zip(chunks, chunks[1:]):
            assert previous.end - current.start == 200

    def test_chunk_length_never_exceeds_chunk_size(self) -> None:
        chunks = segment_text(_sentences(300), chunk_size=800, overlap=100)

        assert all(c.end - c.start <= 800 for c in chunks)

    def test_whitespace_window_is_dropped_without_consuming_index(self) -> None:
        text = "a" * 10 + " " * 30 + "b" * 10

        chunks = segment_text(text, chunk_size=10, overlap=0)

        assert [c.content for c in chunks] == ["a" * 10, "b" * 10]
        assert [c.index for c in chunks] == [0, 1]

    @pytest.mark.parametrize("chunk_size,overlap", [(200, 200), (100, 300), (100, -1)])
    def test_invalid_window_raises(self, chunk_size: int, overlap: int) -> None:
        with pytest.raises(ValueError):
            segment_text("some text", chunk_size=chunk_size, overlap=overlap)

    def test_empty_text_raises(self) -> None:
        with pytest.raises(ValueError):
            segment_text("")


class TestSegmentationTask:
    """Task wrapper reporting unusable text as EmptyContentError."""

    def test_chunk_uses_configured_window(self) -> None:
        task = SegmentationTask(chunk_size=1500, chunk_overlap=200)

        chunks = task.chunk("a" * 3200)

        assert len(chunks) == 3

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
    def test_blank_text_raises_empty_content(self, text: str) -> None:
        task = SegmentationTask()

        with pytest.raises(EmptyContentError) as exc_info:
            task.chunk(text, document_id="doc-1")

        assert exc_info.value.status_code == 400
        assert exc_info.value.details["document_id"] == "doc-1"

    def test_invalid_configuration_raises(self) -> None:
        with pytest.raises(ValueError):
            SegmentationTask(chunk_size=100, chunk_overlap=100)
