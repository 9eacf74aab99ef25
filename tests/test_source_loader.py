"""Tests for input handles and the sequential source loader."""

import tempfile
from pathlib import Path

import pytest

from pdfcollate.config import PDF_MEDIA_TYPE
from pdfcollate.services.pdf_codec import PdfCodec
from pdfcollate.services.source_loader import (
    InputFile,
    LocalFile,
    MemoryFile,
    filter_accepted,
    load_sources,
)
from pdfcollate.utils.exceptions import LoadError


class TestFilterAccepted:
    def test_drops_other_media_types(self):
        files = [
            MemoryFile("a.pdf", b""),
            MemoryFile("notes.txt", b"", media_type="text/plain"),
            MemoryFile("b.pdf", b""),
        ]
        assert [f.name for f in filter_accepted(files)] == ["a.pdf", "b.pdf"]

    def test_custom_types(self):
        files = [MemoryFile("x.bin", b"", media_type="application/x-pdf")]
        assert filter_accepted(files, ["application/x-pdf"]) == files
        assert filter_accepted(files) == []


class TestLocalFile:
    def test_media_type_guessed_from_extension(self):
        assert LocalFile("/tmp/doc.pdf").media_type == PDF_MEDIA_TYPE
        assert LocalFile("/tmp/doc.unknownext").media_type == "application/octet-stream"

    def test_explicit_media_type(self):
        assert LocalFile("/tmp/doc", media_type=PDF_MEDIA_TYPE).media_type == PDF_MEDIA_TYPE

    def test_is_input_file(self):
        assert isinstance(LocalFile("/tmp/doc.pdf"), InputFile)
        assert isinstance(MemoryFile("a.pdf", b""), InputFile)

    @pytest.mark.asyncio
    async def test_read_bytes(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "a.pdf"
            path.write_bytes(b"%PDF-data")
            assert await LocalFile(path).read() == b"%PDF-data"


class TestLoadSources:
    @pytest.mark.asyncio
    async def test_counts_pages_in_input_order(self, pdf_file):
        report = await load_sources([pdf_file("A", 3), pdf_file("B", 1)], PdfCodec())
        assert [(f.name, f.page_count) for f in report.accepted] == [("A.pdf", 3), ("B.pdf", 1)]
        assert report.total_pages == 4
        assert report.errors == []

    @pytest.mark.asyncio
    async def test_bad_file_does_not_stop_batch(self, pdf_file):
        files = [pdf_file("A", 2), MemoryFile("broken.pdf", b"garbage"), pdf_file("C", 1)]
        report = await load_sources(files, PdfCodec())

        assert [f.name for f in report.accepted] == ["A.pdf", "C.pdf"]
        assert len(report.errors) == 1
        assert isinstance(report.errors[0], LoadError)
        assert report.errors[0].file_name == "broken.pdf"

    @pytest.mark.asyncio
    async def test_unreadable_local_file(self):
        report = await load_sources([LocalFile("/nonexistent/missing.pdf")], PdfCodec())
        assert report.accepted == []
        assert report.errors[0].file_name == "missing.pdf"

    @pytest.mark.asyncio
    async def test_handles_are_kept_for_re_reading(self, pdf_file):
        handle = pdf_file("A", 1)
        report = await load_sources([handle], PdfCodec())
        assert report.accepted[0].handle is handle
