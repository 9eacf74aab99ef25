"""
PdfCollate - Export Service Module

Builds the two output artifacts from the current page order:
  - compose: one PDF with every page in visual order
  - split:   one ZIP archive holding a single-page PDF per page

Both exports re-read and re-parse the source bytes on every call and skip
pages that fail; they abort only when no page could be exported.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pdfcollate.config import (
    DEFAULT_PAGE_ENTRY_TEMPLATE,
    PDF_MEDIA_TYPE,
    ZIP_MEDIA_TYPE,
)
from pdfcollate.editor.page_model import (
    PageCollection,
    PageDescriptor,
    SourceDocument,
    SourceRegistry,
)
from pdfcollate.services.archive import ZipArchive
from pdfcollate.services.pdf_codec import PdfCodec
from pdfcollate.utils.exceptions import (
    DocumentParseError,
    DocumentWriteError,
    ExportFatalError,
    ExportInProgressError,
    ExportPageError,
    PageCopyError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Artifact:
    """A produced output file, kept in memory until delivered."""

    name: str
    data: bytes
    media_type: str

    def write_to(self, directory: str | Path = ".") -> Path:
        """Write the artifact into ``directory`` and return its path."""
        out_dir = Path(directory or ".")
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / self.name
        path.write_bytes(self.data)
        logger.info("Saved %s (%d bytes)", path, len(self.data))
        return path


@dataclass
class ExportResult:
    """Aggregate outcome of an export; failed pages are counted, not listed."""

    artifact: Artifact
    succeeded: int
    failed: int
    entry_names: list[str] = field(default_factory=list)


class ExportPipeline:
    """Compose and split exports guarded by a single in-flight flag."""

    def __init__(
        self,
        codec: PdfCodec | None = None,
        page_entry_template: str = DEFAULT_PAGE_ENTRY_TEMPLATE,
    ) -> None:
        self.codec = codec or PdfCodec()
        self.page_entry_template = page_entry_template
        self._running: str | None = None

    @property
    def in_progress(self) -> bool:
        return self._running is not None

    def _acquire(self, operation: str) -> None:
        if self._running is not None:
            raise ExportInProgressError(operation, running=self._running)
        self._running = operation

    def _release(self) -> None:
        self._running = None

    def entry_name(self, position: int) -> str:
        return self.page_entry_template.format(position=position)

    # ------------------------------------------------------------------
    # Compose
    # ------------------------------------------------------------------

    async def compose(
        self, collection: PageCollection, registry: SourceRegistry, base_name: str
    ) -> ExportResult:
        """Merge every page into one PDF named ``{base_name}.pdf``.

        Raises:
            ExportInProgressError: If another export is running
            ExportFatalError: If no page could be exported
        """
        self._acquire("compose")
        try:
            pages, sources = collection.snapshot(), _snapshot_sources(registry)
            return await self._compose(pages, sources, base_name)
        finally:
            self._release()

    async def _compose(
        self,
        pages: tuple[PageDescriptor, ...],
        sources: dict[int, SourceDocument],
        base_name: str,
    ) -> ExportResult:
        if not pages:
            raise ExportFatalError("compose", "there are no pages to export")

        # Batch by source so each document is parsed once
        by_source: dict[int, list[PageDescriptor]] = {}
        for page in pages:
            by_source.setdefault(page.source_index, []).append(page)

        opened = []
        resolved = {}
        failed = 0
        output = self.codec.create_empty()
        try:
            for source_index, source_pages in by_source.items():
                src = await self._open_source(sources, source_index)
                if src is None:
                    for page in source_pages:
                        self._log_page_error(ExportPageError(page.id, "source unavailable"))
                    continue
                opened.append(src)
                for page in source_pages:
                    resolved[page.id] = src

            succeeded = 0
            for page in pages:
                src = resolved.get(page.id)
                if src is None:
                    failed += 1
                    continue
                try:
                    new_page = self.codec.copy_page(output, src, page.page_index)
                    if page.rotation != 0:
                        self.codec.set_rotation(new_page, page.rotation)
                except (PageCopyError, DocumentWriteError) as e:
                    self._log_page_error(ExportPageError(page.id, str(e)))
                    # A page appended before its rotation failed must not stay
                    if self.codec.page_count(output) > succeeded:
                        self.codec.remove_last_page(output)
                    failed += 1
                    continue
                succeeded += 1
                await asyncio.sleep(0)

            if succeeded == 0:
                raise ExportFatalError("compose", "no page could be exported")

            try:
                data = await asyncio.to_thread(self.codec.serialize, output)
            except DocumentWriteError as e:
                raise ExportFatalError("compose", str(e)) from e
        finally:
            for src in opened:
                self.codec.close(src)
            self.codec.close(output)

        artifact = Artifact(name=f"{base_name}.pdf", data=data, media_type=PDF_MEDIA_TYPE)
        logger.info(
            "Composed %s: %d page(s) exported, %d skipped", artifact.name, succeeded, failed
        )
        return ExportResult(artifact=artifact, succeeded=succeeded, failed=failed)

    # ------------------------------------------------------------------
    # Split
    # ------------------------------------------------------------------

    async def split(
        self, collection: PageCollection, registry: SourceRegistry, base_name: str
    ) -> ExportResult:
        """Export every page as its own PDF inside ``{base_name}.zip``.

        Raises:
            ExportInProgressError: If another export is running
            ExportFatalError: If no page could be exported
        """
        self._acquire("split")
        try:
            pages, sources = collection.snapshot(), _snapshot_sources(registry)
            return await self._split(pages, sources, base_name)
        finally:
            self._release()

    async def _split(
        self,
        pages: tuple[PageDescriptor, ...],
        sources: dict[int, SourceDocument],
        base_name: str,
    ) -> ExportResult:
        if not pages:
            raise ExportFatalError("split", "there are no pages to export")

        archive = ZipArchive()
        failed = 0
        for page in pages:
            try:
                data = await self._extract_single_page(sources, page)
            except ExportPageError as e:
                self._log_page_error(e)
                failed += 1
                continue
            archive.add_entry(self.entry_name(page.position), data)

        if len(archive) == 0:
            archive.finalize()
            raise ExportFatalError("split", "no page could be exported")

        data = await asyncio.to_thread(archive.finalize)
        artifact = Artifact(name=f"{base_name}.zip", data=data, media_type=ZIP_MEDIA_TYPE)
        logger.info(
            "Split into %s: %d page(s) exported, %d skipped", artifact.name, len(archive), failed
        )
        return ExportResult(
            artifact=artifact,
            succeeded=len(archive),
            failed=failed,
            entry_names=archive.entry_names,
        )

    async def _extract_single_page(
        self, sources: dict[int, SourceDocument], page: PageDescriptor
    ) -> bytes:
        """Build a one-page PDF for ``page``.

        Raises:
            ExportPageError: If the source or the page cannot be processed
        """
        src = await self._open_source(sources, page.source_index)
        if src is None:
            raise ExportPageError(page.id, "source unavailable")

        single = self.codec.create_empty()
        try:
            new_page = self.codec.copy_page(single, src, page.page_index)
            if page.rotation != 0:
                self.codec.set_rotation(new_page, page.rotation)
            return await asyncio.to_thread(self.codec.serialize, single)
        except (PageCopyError, DocumentWriteError) as e:
            raise ExportPageError(page.id, str(e)) from e
        finally:
            self.codec.close(single)
            self.codec.close(src)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _open_source(self, sources: dict[int, SourceDocument], source_index: int):
        """Read and parse a source document, or return None on failure."""
        source = sources.get(source_index)
        if source is None:
            logger.error("Unknown source document %d", source_index)
            return None
        try:
            data = await source.handle.read()
            return await asyncio.to_thread(self.codec.parse, data)
        except (DocumentParseError, OSError) as e:
            logger.error("Failed to process %s: %s", source.display_name, e)
            return None

    def _log_page_error(self, error: ExportPageError) -> None:
        logger.error("Skipping page: %s", error)


def _snapshot_sources(registry: SourceRegistry) -> dict[int, SourceDocument]:
    """Map each source index to its document as registered at export start."""
    return {doc.source_index: doc for doc in registry}
