"""
PdfCollate - Page Operations

Functions for manipulating pages in a collection: rotation, deletion and selection.
"""

from collections.abc import Iterable

from pdfcollate.editor.page_model import PageCollection, PageId
from pdfcollate.editor.selection import SelectionSet
from pdfcollate.utils.logger import logger
from pdfcollate.utils.rotation import normalize_rotation


def rotate_pages(collection: PageCollection, page_ids: Iterable[PageId], degrees: int = 90) -> int:
    """Rotate pages by the specified degrees.

    Args:
        collection: The PageCollection to modify
        page_ids: Ids of the pages to rotate
        degrees: Rotation angle (90, 180, 270, or -90)

    Returns:
        Number of pages rotated

    Raises:
        PageNotFoundError: If an id is not in the collection
    """
    page_ids = list(page_ids)
    if not page_ids:
        return 0

    degrees = normalize_rotation(degrees)
    if degrees == 0:
        return 0

    for page_id in page_ids:
        collection.rotate(page_id, degrees)

    logger.info(f"Rotated {len(page_ids)} page(s) by {degrees}°")
    return len(page_ids)


def delete_pages(
    collection: PageCollection, selection: SelectionSet, page_ids: Iterable[PageId]
) -> int:
    """Delete pages and prune them from the selection.

    Args:
        collection: The PageCollection to modify
        selection: Selection bound to ``collection``
        page_ids: Ids of the pages to delete; unknown ids are ignored

    Returns:
        Number of pages removed
    """
    page_ids = list(page_ids)
    if not page_ids:
        return 0

    removed = collection.delete(page_ids)
    selection.prune()
    logger.info(f"Deleted {removed} page(s)")
    return removed


def set_selection(selection: SelectionSet, page_ids: Iterable[PageId], selected: bool) -> int:
    """Set the selection state for pages.

    Returns:
        Number of pages changed
    """
    count = 0
    for page_id in page_ids:
        selection.toggle(page_id, selected)
        count += 1
    logger.debug(f"Set selection to {selected} for {count} page(s)")
    return count


def select_all(selection: SelectionSet) -> int:
    """Select all pages.

    Returns:
        Number of selected pages
    """
    selection.select_all()
    logger.info("Selected all pages")
    return len(selection)


def deselect_all(selection: SelectionSet) -> None:
    """Deselect all pages."""
    selection.clear()
    logger.info("Deselected all pages")
