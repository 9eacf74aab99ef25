"""
PdfCollate - Editor Module

In-memory page editing: the page collection model, selection, drag/drop
reordering and the session facade that ties them to loading and export.

Main Components:
- PageCollection: Ordered page descriptors
- SelectionSet: Selected page ids
- ReorderEngine: Drag/drop state machine
- EditorSession: Facade for one editing session (import from
  ``pdfcollate.editor.session``; it depends on the services package)
"""

from pdfcollate.editor.page_model import (
    PageCollection,
    PageDescriptor,
    PageId,
    SourceDocument,
    SourceRegistry,
)
from pdfcollate.editor.reorder import DragState, ReorderEngine, move_pages
from pdfcollate.editor.selection import SelectionSet

__all__ = [
    "PageCollection",
    "PageDescriptor",
    "PageId",
    "SourceDocument",
    "SourceRegistry",
    "SelectionSet",
    "ReorderEngine",
    "DragState",
    "move_pages",
]
