"""
PdfCollate - Page Model

Data models for the loaded source documents and the ordered page collection.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, NamedTuple

from pdfcollate.utils.exceptions import PageNotFoundError
from pdfcollate.utils.rotation import normalize_rotation

if TYPE_CHECKING:
    from pdfcollate.services.source_loader import InputFile


class PageId(NamedTuple):
    """Stable identity of a page: source document index and original page index."""

    source_index: int
    page_index: int

    def __str__(self) -> str:
        return f"{self.source_index}-{self.page_index}"


@dataclass(frozen=True)
class SourceDocument:
    """A loaded source document.

    Attributes:
        source_index: Stable index in load order
        handle: Byte handle the document is re-read from on every export
        page_count: Number of pages found when the file was accepted
        display_name: File name shown to the user
    """

    source_index: int
    handle: "InputFile"
    page_count: int
    display_name: str


@dataclass
class PageDescriptor:
    """State of a single logical page in the collection.

    Attributes:
        id: Unique (source_index, page_index) identity
        display_name: Name of the source document
        rotation: Absolute rotation applied on export (0, 90, 180, 270)
        selected: Mirror of SelectionSet membership
        position: 1-based rank in the collection, maintained by renumber()
    """

    id: PageId
    display_name: str = ""
    rotation: int = 0
    selected: bool = False
    _position: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate and normalize rotation angle."""
        self.id = PageId(*self.id)
        self.rotation = normalize_rotation(self.rotation)

    @property
    def position(self) -> int:
        return self._position

    @property
    def source_index(self) -> int:
        return self.id.source_index

    @property
    def page_index(self) -> int:
        return self.id.page_index

    def rotate(self, degrees: int) -> None:
        """Rotate page by specified degrees."""
        self.rotation = normalize_rotation(self.rotation + degrees)

    def rotate_left(self) -> None:
        """Rotate page 90 degrees counter-clockwise."""
        self.rotation = (self.rotation - 90) % 360

    def rotate_right(self) -> None:
        """Rotate page 90 degrees clockwise."""
        self.rotation = (self.rotation + 90) % 360

    def to_dict(self) -> dict:
        """Convert to dictionary for display or logging."""
        return {
            "id": str(self.id),
            "position": self.position,
            "rotation": self.rotation,
            "selected": self.selected,
            "source_index": self.source_index,
            "page_index": self.page_index,
            "display_name": self.display_name,
        }


class SourceRegistry:
    """Holds the loaded source documents, indexed by load order."""

    def __init__(self) -> None:
        self._sources: list[SourceDocument] = []

    def add(self, handle: "InputFile", page_count: int, display_name: str) -> SourceDocument:
        """Register a new source and assign it the next stable index."""
        doc = SourceDocument(
            source_index=len(self._sources),
            handle=handle,
            page_count=page_count,
            display_name=display_name,
        )
        self._sources.append(doc)
        return doc

    def get(self, source_index: int) -> SourceDocument | None:
        if 0 <= source_index < len(self._sources):
            return self._sources[source_index]
        return None

    @property
    def total_pages(self) -> int:
        return sum(doc.page_count for doc in self._sources)

    def clear(self) -> None:
        self._sources.clear()

    def __len__(self) -> int:
        return len(self._sources)

    def __iter__(self) -> Iterator[SourceDocument]:
        return iter(list(self._sources))


class PageCollection:
    """Ordered sequence of PageDescriptor values.

    The list order is the visual order. Every structural mutation ends with
    renumber(), so ``position`` always equals the 1-based index.
    """

    def __init__(self) -> None:
        self._pages: list[PageDescriptor] = []
        self._index: dict[PageId, PageDescriptor] = {}

    # -- structural mutations -------------------------------------------------

    def load(self, docs: Iterable[SourceDocument], replace: bool = False) -> list[PageDescriptor]:
        """Create one descriptor per page of each document.

        Args:
            docs: Source documents, in load order
            replace: Drop all existing descriptors first (initial load)

        Returns:
            The newly created descriptors

        Raises:
            ValueError: If a generated id already exists in the collection
        """
        if replace:
            self.clear()

        created: list[PageDescriptor] = []
        seen: set[PageId] = set(self._index)
        for doc in docs:
            for page_index in range(doc.page_count):
                page_id = PageId(doc.source_index, page_index)
                if page_id in seen:
                    raise ValueError(f"Duplicate page id {page_id}")
                seen.add(page_id)
                created.append(PageDescriptor(id=page_id, display_name=doc.display_name))

        self._pages.extend(created)
        for page in created:
            self._index[page.id] = page
        self.renumber()
        return created

    def renumber(self) -> None:
        """Update positions to be sequential after changes."""
        for i, page in enumerate(self._pages):
            page._position = i + 1

    def delete(self, ids: Iterable[PageId]) -> int:
        """Remove every descriptor whose id is in ``ids``.

        Returns:
            Number of descriptors removed
        """
        doomed = {PageId(*page_id) for page_id in ids}
        if not doomed:
            return 0

        remaining = [page for page in self._pages if page.id not in doomed]
        removed = len(self._pages) - len(remaining)
        if removed:
            for page in self._pages:
                if page.id in doomed:
                    del self._index[page.id]
            self._pages = remaining
            self.renumber()
        return removed

    def rotate(self, page_id: PageId, degrees: int = 90) -> PageDescriptor:
        """Rotate one descriptor clockwise by ``degrees`` (default 90)."""
        page = self.get(page_id)
        page.rotate(degrees)
        return page

    def replace_order(self, pages: Iterable[PageDescriptor]) -> None:
        """Install a new ordering of the same descriptors.

        Raises:
            ValueError: If ``pages`` is not a permutation of the collection
        """
        new_order = list(pages)
        if len(new_order) != len(self._pages) or {p.id for p in new_order} != set(self._index):
            raise ValueError("New order must be a permutation of the current pages")
        self._pages = [self._index[p.id] for p in new_order]
        self.renumber()

    def clear(self) -> None:
        self._pages.clear()
        self._index.clear()

    # -- queries ----------------------------------------------------------------

    def get(self, page_id: PageId) -> PageDescriptor:
        """Return the descriptor for ``page_id``.

        Raises:
            PageNotFoundError: If the id is not in the collection
        """
        try:
            return self._index[PageId(*page_id)]
        except (KeyError, TypeError):
            raise PageNotFoundError(page_id) from None

    def index_of(self, page_id: PageId) -> int:
        """Return the 0-based index of ``page_id`` in the current order."""
        return self.get(page_id).position - 1

    def at_position(self, position: int) -> PageDescriptor | None:
        """Get the descriptor at a 1-based position, or None if out of range."""
        if 1 <= position <= len(self._pages):
            return self._pages[position - 1]
        return None

    def ids(self) -> list[PageId]:
        return [page.id for page in self._pages]

    def pages(self) -> list[PageDescriptor]:
        return list(self._pages)

    def snapshot(self) -> tuple[PageDescriptor, ...]:
        """Return detached copies of the descriptors in visual order."""
        copies = []
        for page in self._pages:
            clone = replace(page)
            clone._position = page.position
            copies.append(clone)
        return tuple(copies)

    def __len__(self) -> int:
        return len(self._pages)

    def __iter__(self) -> Iterator[PageDescriptor]:
        return iter(list(self._pages))

    def __contains__(self, page_id: object) -> bool:
        try:
            return PageId(*page_id) in self._index  # type: ignore[misc]
        except TypeError:
            return False
