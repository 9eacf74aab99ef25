"""
PdfCollate - Selection Set

Tracks which pages are selected. Membership is the source of truth and is
mirrored onto each descriptor's ``selected`` flag on every change.
"""

from collections.abc import Iterable

from pdfcollate.editor.page_model import PageCollection, PageId


class SelectionSet:
    """Subset of the page ids currently present in a PageCollection."""

    def __init__(self, collection: PageCollection) -> None:
        self._collection = collection
        self._ids: set[PageId] = set()

    def toggle(self, page_id: PageId, selected: bool) -> None:
        """Add or remove one page.

        Raises:
            PageNotFoundError: If the id is not in the collection
        """
        page = self._collection.get(page_id)
        if selected:
            self._ids.add(page.id)
        else:
            self._ids.discard(page.id)
        page.selected = selected

    def replace(self, ids: Iterable[PageId]) -> None:
        """Set membership to exactly ``ids``.

        Raises:
            PageNotFoundError: If any id is not in the collection
        """
        new_ids = {self._collection.get(page_id).id for page_id in ids}
        self._ids = new_ids
        self._sync()

    def select_all(self) -> None:
        self._ids = set(self._collection.ids())
        self._sync()

    def clear(self) -> None:
        self._ids.clear()
        self._sync()

    def prune(self) -> int:
        """Drop ids no longer present in the collection.

        Returns:
            Number of ids removed from the selection
        """
        stale = {page_id for page_id in self._ids if page_id not in self._collection}
        self._ids -= stale
        self._sync()
        return len(stale)

    def ids(self) -> list[PageId]:
        """Selected ids in the collection's current order."""
        return [page_id for page_id in self._collection.ids() if page_id in self._ids]

    def _sync(self) -> None:
        for page in self._collection:
            page.selected = page.id in self._ids

    def __contains__(self, page_id: object) -> bool:
        try:
            return PageId(*page_id) in self._ids  # type: ignore[misc]
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)
