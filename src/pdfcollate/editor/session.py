"""
PdfCollate - Editor Session

Facade that owns the source registry, the page collection, the selection,
the drag/drop engine and the export pipeline for one editing session.
"""

from collections.abc import Iterable

from pdfcollate.editor import page_operations
from pdfcollate.editor.page_model import (
    PageCollection,
    PageDescriptor,
    PageId,
    SourceDocument,
    SourceRegistry,
)
from pdfcollate.editor.reorder import ReorderEngine
from pdfcollate.editor.selection import SelectionSet
from pdfcollate.services.export_service import ExportPipeline, ExportResult
from pdfcollate.services.pdf_codec import PdfCodec
from pdfcollate.services.source_loader import (
    InputFile,
    LoadReport,
    filter_accepted,
    load_sources,
)
from pdfcollate.utils.config_manager import EditorSettings
from pdfcollate.utils.i18n import _
from pdfcollate.utils.logger import logger


class EditorSession:
    """One in-memory editing session.

    Args:
        settings: Explicit settings; defaults are used when omitted
        codec: PDF codec shared by loading and exporting
    """

    def __init__(self, settings: EditorSettings | None = None, codec: PdfCodec | None = None):
        self.settings = settings or EditorSettings()
        self.codec = codec or PdfCodec()
        self.registry = SourceRegistry()
        self.collection = PageCollection()
        self.selection = SelectionSet(self.collection)
        self.reorder = ReorderEngine(self.collection, self.selection)
        self.exporter = ExportPipeline(self.codec, self.settings.page_entry_template)
        self.is_loading = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_files(self, files: Iterable[InputFile]) -> LoadReport:
        """Replace the session content with the given files.

        Nothing is replaced when no file could be loaded.
        """
        return await self._load(files, replace=True)

    async def add_files(self, files: Iterable[InputFile]) -> LoadReport:
        """Append the pages of the given files after the existing pages."""
        return await self._load(files, replace=False)

    async def _load(self, files: Iterable[InputFile], replace: bool) -> LoadReport:
        pdf_files = filter_accepted(files, self.settings.accepted_media_types)
        if not pdf_files:
            return LoadReport()

        self.is_loading = True
        try:
            report = await load_sources(pdf_files, self.codec)
        finally:
            self.is_loading = False

        if not report.accepted:
            return report

        if replace:
            self.clear()

        docs: list[SourceDocument] = [
            self.registry.add(f.handle, f.page_count, f.name) for f in report.accepted
        ]
        self.collection.load(docs)

        if replace:
            logger.info(_("{0} file(s) loaded").format(len(docs)))
        else:
            logger.info(_("{0} file(s) added").format(len(docs)))
        return report

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle(self, page_id: PageId, selected: bool) -> None:
        self.select(page_id, selected=selected)

    def select(self, *page_ids: PageId, selected: bool = True) -> int:
        """Set the selection state of several pages at once."""
        return page_operations.set_selection(self.selection, page_ids, selected)

    def select_all(self) -> int:
        return page_operations.select_all(self.selection)

    def deselect_all(self) -> None:
        page_operations.deselect_all(self.selection)

    def selected_ids(self) -> list[PageId]:
        return self.selection.ids()

    def ids_at_positions(self, positions: Iterable[int]) -> list[PageId]:
        """Map 1-based positions to ids, ignoring positions out of range."""
        ids = []
        for position in positions:
            page = self.collection.at_position(position)
            if page is not None:
                ids.append(page.id)
        return ids

    # ------------------------------------------------------------------
    # Page mutations
    # ------------------------------------------------------------------

    def rotate(self, page_id: PageId, clockwise: bool = True) -> PageDescriptor:
        """Rotate one page a quarter turn.

        Raises:
            PageNotFoundError: If the id is not in the collection
        """
        page = self.collection.get(page_id)
        if clockwise:
            page.rotate_right()
        else:
            page.rotate_left()
        return page

    def rotate_selected(self) -> int:
        return page_operations.rotate_pages(self.collection, self.selection.ids())

    def delete(self, page_ids: Iterable[PageId]) -> int:
        return page_operations.delete_pages(self.collection, self.selection, page_ids)

    def delete_selected(self) -> int:
        return self.delete(self.selection.ids())

    def clear(self) -> None:
        """Remove every page and source document."""
        self.reorder.cancel()
        self.selection.clear()
        self.collection.clear()
        self.registry.clear()

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------

    def drag_start(self, page_id: PageId) -> list[PageId]:
        return self.reorder.drag_start(page_id)

    def drag_over(self, index: int) -> None:
        self.reorder.drag_over(index)

    def drag_leave(self) -> None:
        self.reorder.drag_leave()

    def drop(self, target_index: int) -> bool:
        return self.reorder.drop(target_index)

    def cancel_drag(self) -> None:
        self.reorder.cancel()

    def move(self, page_ids: Iterable[PageId], target_index: int) -> bool:
        """Select ``page_ids`` and drag them to ``target_index`` in one step."""
        page_ids = list(page_ids)
        if not page_ids:
            return False
        self.selection.replace(page_ids)
        self.reorder.drag_start(page_ids[0])
        return self.reorder.drop(target_index)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    async def compose(self, base_name: str | None = None) -> ExportResult:
        return await self.exporter.compose(
            self.collection, self.registry, base_name or self.settings.document_name
        )

    async def split(self, base_name: str | None = None) -> ExportResult:
        return await self.exporter.split(
            self.collection, self.registry, base_name or self.settings.archive_name
        )

    # ------------------------------------------------------------------
    # Preview
    # ------------------------------------------------------------------

    def preview(self, view_mode: str | None = None) -> list[str]:
        """Describe the pages in visual order, one line per page or per row.

        "list" prints one line per page; "blocks" groups four pages per line.
        """
        view_mode = view_mode or self.settings.view_mode
        if view_mode == "list":
            return [_format_list_row(page) for page in self.collection]

        cells = [_format_block_cell(page) for page in self.collection]
        return ["  ".join(cells[i : i + 4]) for i in range(0, len(cells), 4)]

    def __len__(self) -> int:
        return len(self.collection)


def _format_list_row(page: PageDescriptor) -> str:
    marker = "*" if page.selected else " "
    rotation = f" ↻{page.rotation}°" if page.rotation else ""
    return (
        f"{marker} {page.position:>3}. {page.display_name} "
        f"p.{page.page_index + 1}{rotation}"
    )


def _format_block_cell(page: PageDescriptor) -> str:
    marker = "*" if page.selected else ""
    rotation = f"↻{page.rotation}" if page.rotation else ""
    return f"[{page.position}:{page.id}{rotation}{marker}]"
