"""
PdfCollate - Source Loader

Input file handles and the sequential loader that validates them as PDFs.
"""

import asyncio
import logging
import mimetypes
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from pdfcollate.config import PDF_MEDIA_TYPE
from pdfcollate.services.pdf_codec import PdfCodec
from pdfcollate.utils.exceptions import DocumentParseError, LoadError

logger = logging.getLogger(__name__)


@runtime_checkable
class InputFile(Protocol):
    """A user-supplied file: a name, a declared media type and readable bytes."""

    name: str
    media_type: str

    async def read(self) -> bytes: ...


@dataclass
class MemoryFile:
    """File handle over bytes already in memory."""

    name: str
    data: bytes
    media_type: str = PDF_MEDIA_TYPE

    async def read(self) -> bytes:
        return self.data


class LocalFile:
    """File handle over a path on disk, read again on every call."""

    def __init__(self, path: str | Path, media_type: str | None = None) -> None:
        self.path = Path(path)
        self.name = self.path.name
        if media_type is None:
            media_type, _encoding = mimetypes.guess_type(self.path.name)
        self.media_type = media_type or "application/octet-stream"

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r}, media_type={self.media_type!r})"


@dataclass(frozen=True)
class AcceptedFile:
    """A file that parsed as a PDF, with its page count."""

    handle: InputFile
    page_count: int

    @property
    def name(self) -> str:
        return self.handle.name


@dataclass
class LoadReport:
    """Outcome of one load/add action."""

    accepted: list[AcceptedFile] = field(default_factory=list)
    errors: list[LoadError] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return sum(f.page_count for f in self.accepted)


def filter_accepted(
    files: Iterable[InputFile], accepted_media_types: Iterable[str] = (PDF_MEDIA_TYPE,)
) -> list[InputFile]:
    """Keep only files whose declared media type is accepted.

    Other files are dropped silently.
    """
    accepted_types = set(accepted_media_types)
    kept: list[InputFile] = []
    for f in files:
        if f.media_type in accepted_types:
            kept.append(f)
        else:
            logger.debug("Ignoring %s with media type %s", f.name, f.media_type)
    return kept


async def load_sources(files: Iterable[InputFile], codec: PdfCodec) -> LoadReport:
    """Read and validate files one at a time, in input order.

    Each file is parsed only to count its pages; the parsed document is closed
    immediately. A file that cannot be read or parsed is reported as a
    LoadError and the rest of the batch continues.
    """
    report = LoadReport()
    for f in files:
        doc = None
        try:
            data = await f.read()
            doc = await asyncio.to_thread(codec.parse, data)
            page_count = codec.page_count(doc)
        except (DocumentParseError, OSError) as e:
            error = LoadError(f.name, str(e))
            logger.error("Error loading %s: %s", f.name, e)
            report.errors.append(error)
            continue
        finally:
            codec.close(doc)

        report.accepted.append(AcceptedFile(handle=f, page_count=page_count))
        logger.info("Loaded %s (%d pages)", f.name, page_count)

    return report
