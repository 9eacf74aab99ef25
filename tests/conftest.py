"""Pytest configuration for pdfcollate tests.

Provides factories for small in-memory PDFs whose pages carry a text label
(e.g. "A0", "A1") so tests can check which source page ended up where.
"""

import io
import re

import pikepdf
import pytest

from pdfcollate.services.source_loader import MemoryFile

_LABEL_RE = re.compile(rb"\((\w+)\) Tj")


def _create_test_pdf(label: str, num_pages: int = 3, rotate: int | None = None) -> bytes:
    """Create a PDF whose page i shows the text ``{label}{i}``."""
    pdf = pikepdf.Pdf.new()
    for i in range(num_pages):
        page_dict = pikepdf.Dictionary(
            Type=pikepdf.Name.Page,
            MediaBox=[0, 0, 612, 792],
            Contents=pdf.make_stream(f"BT /F1 12 Tf 100 700 Td ({label}{i}) Tj ET".encode()),
        )
        if rotate is not None:
            page_dict.Rotate = rotate
        pdf.pages.append(pikepdf.Page(page_dict))
    buffer = io.BytesIO()
    pdf.save(buffer)
    pdf.close()
    return buffer.getvalue()


def _read_pages(data: bytes) -> list[tuple[str, int]]:
    """Return (label, /Rotate) for each page of a PDF."""
    with pikepdf.open(io.BytesIO(data)) as pdf:
        pages = []
        for page in pdf.pages:
            contents = page.obj.Contents.read_bytes()
            match = _LABEL_RE.search(contents)
            label = match.group(1).decode() if match else ""
            pages.append((label, int(page.obj.get("/Rotate", 0))))
        return pages


@pytest.fixture
def make_pdf():
    """Factory: make_pdf(label, num_pages=3, rotate=None) -> bytes."""
    return _create_test_pdf


@pytest.fixture
def pdf_file():
    """Factory: pdf_file(label, num_pages=3, rotate=None) -> MemoryFile named {label}.pdf."""

    def _factory(label: str, num_pages: int = 3, rotate: int | None = None) -> MemoryFile:
        return MemoryFile(f"{label}.pdf", _create_test_pdf(label, num_pages, rotate))

    return _factory


@pytest.fixture
def read_pages():
    """Function returning [(label, rotate), ...] for PDF bytes."""
    return _read_pages
