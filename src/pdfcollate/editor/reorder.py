"""
PdfCollate - Reorder Engine

Drag-and-drop reordering of one page or of a non-contiguous multi-selection.
The selected pages move as one contiguous block; relative order inside the
block and inside the remaining pages is preserved.
"""

from collections.abc import Iterable, Sequence
from enum import Enum, auto

from pdfcollate.editor.page_model import PageCollection, PageDescriptor, PageId
from pdfcollate.editor.selection import SelectionSet
from pdfcollate.utils.logger import logger


class DragState(Enum):
    """Drag lifecycle. IDLE is both the initial and the terminal state."""

    IDLE = auto()
    DRAGGING = auto()


def move_pages(
    pages: Sequence[PageDescriptor],
    moving_ids: Iterable[PageId],
    target_index: int,
) -> list[PageDescriptor]:
    """Compute the order obtained by dropping ``moving_ids`` at ``target_index``.

    A single page is removed and re-inserted at ``target_index`` of the
    shortened list. Several pages are gathered into one block (in their current
    order) and inserted into the remaining pages at ``target_index`` minus the
    number of moving pages that sat before it.

    Args:
        pages: Current order
        moving_ids: Ids of the pages being dragged
        target_index: Raw 0-based drop index in the current order

    Returns:
        New list; ``pages`` is not modified
    """
    moving = set(moving_ids)
    target_index = max(0, min(target_index, len(pages)))

    if len(moving) == 1:
        (page_id,) = moving
        new_pages = list(pages)
        source_pos = next(i for i, page in enumerate(new_pages) if page.id == page_id)
        dragged = new_pages.pop(source_pos)
        new_pages.insert(target_index, dragged)
        return new_pages

    selected_block = [page for page in pages if page.id in moving]
    unselected = [page for page in pages if page.id not in moving]
    selected_before_target = sum(
        1 for i, page in enumerate(pages) if page.id in moving and i < target_index
    )
    adjusted_target = max(0, target_index - selected_before_target)

    return unselected[:adjusted_target] + selected_block + unselected[adjusted_target:]


class ReorderEngine:
    """Drag/drop state machine over a PageCollection and its SelectionSet."""

    def __init__(self, collection: PageCollection, selection: SelectionSet) -> None:
        self._collection = collection
        self._selection = selection
        self.state = DragState.IDLE
        self.dragged_id: PageId | None = None
        self.hover_index: int | None = None
        self._active: list[PageId] = []

    @property
    def active_selection(self) -> list[PageId]:
        """Ids frozen at drag start, empty while idle."""
        return list(self._active)

    def drag_start(self, page_id: PageId) -> list[PageId]:
        """Begin dragging ``page_id`` and materialize the active selection.

        If the page is not selected, the selection collapses to that page alone.

        Raises:
            PageNotFoundError: If the id is not in the collection
        """
        page = self._collection.get(page_id)
        if page.id not in self._selection:
            self._selection.replace([page.id])

        self._active = self._selection.ids()
        self.dragged_id = page.id
        self.hover_index = None
        self.state = DragState.DRAGGING
        logger.debug(f"Drag started on {page.id} with {len(self._active)} page(s)")
        return list(self._active)

    def drag_over(self, index: int) -> None:
        if self.state is DragState.DRAGGING:
            self.hover_index = index

    def drag_leave(self) -> None:
        self.hover_index = None

    def drop(self, target_index: int) -> bool:
        """Drop the active selection at ``target_index`` and renumber.

        Returns:
            True if the collection was reordered, False if no drag was active
        """
        if self.state is not DragState.DRAGGING:
            return False

        active = [page_id for page_id in self._active if page_id in self._collection]
        if not active:
            logger.debug("Drop ignored: dragged pages are gone")
            self._reset()
            return False

        new_order = move_pages(self._collection.pages(), active, target_index)
        self._collection.replace_order(new_order)
        self._selection.replace(active)

        if len(active) == 1:
            logger.info(f"Moved page {active[0]} to index {target_index}")
        else:
            logger.info(f"Moved {len(active)} pages to index {target_index}")

        self._reset()
        return True

    def cancel(self) -> None:
        """End the drag without reordering."""
        if self.state is DragState.DRAGGING:
            logger.debug("Drag cancelled")
        self._reset()

    def _reset(self) -> None:
        self.state = DragState.IDLE
        self.dragged_id = None
        self.hover_index = None
        self._active = []
