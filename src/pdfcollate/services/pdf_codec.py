"""
PdfCollate - PDF Codec

Thin pikepdf adapter exposing the primitives the export pipeline needs:
parse, create, copy page, set rotation and serialize.
"""

import io
import logging

import pikepdf

from pdfcollate.utils.exceptions import DocumentParseError, DocumentWriteError, PageCopyError
from pdfcollate.utils.rotation import normalize_rotation

logger = logging.getLogger(__name__)


class PdfCodec:
    """Byte-level PDF operations backed by pikepdf.

    Parsed documents are plain ``pikepdf.Pdf`` objects; callers own them and
    must ``close()`` them when done.
    """

    def parse(self, data: bytes) -> pikepdf.Pdf:
        """Parse PDF bytes.

        Raises:
            DocumentParseError: If the bytes are not a readable PDF
        """
        try:
            return pikepdf.open(io.BytesIO(data))
        except pikepdf.PasswordError as e:
            raise DocumentParseError(f"password protected: {e}") from e
        except (pikepdf.PdfError, ValueError) as e:
            raise DocumentParseError(str(e)) from e

    def create_empty(self) -> pikepdf.Pdf:
        return pikepdf.Pdf.new()

    def page_count(self, doc: pikepdf.Pdf) -> int:
        return len(doc.pages)

    def copy_page(self, dest: pikepdf.Pdf, src: pikepdf.Pdf, page_index: int) -> pikepdf.Page:
        """Append page ``page_index`` of ``src`` to ``dest``.

        Returns:
            The page as it now exists in ``dest``

        Raises:
            PageCopyError: If the index is out of range or pikepdf fails
        """
        if page_index < 0 or page_index >= len(src.pages):
            raise PageCopyError(page_index, f"document has {len(src.pages)} pages")
        try:
            dest.pages.append(src.pages[page_index])
        except (pikepdf.PdfError, ValueError, TypeError) as e:
            raise PageCopyError(page_index, str(e)) from e
        return dest.pages[-1]

    def remove_last_page(self, doc: pikepdf.Pdf) -> None:
        del doc.pages[-1]

    def set_rotation(self, page: pikepdf.Page, degrees: int) -> None:
        """Set the absolute /Rotate of a page, replacing any inherited value.

        Raises:
            DocumentWriteError: If pikepdf rejects the change
        """
        rotation = normalize_rotation(degrees)
        try:
            page.Rotate = rotation
        except (pikepdf.PdfError, ValueError, TypeError) as e:
            raise DocumentWriteError(f"cannot set rotation: {e}") from e
        logger.debug("Set page rotation to %d°", rotation)

    def serialize(self, doc: pikepdf.Pdf) -> bytes:
        """Save a document to bytes.

        Raises:
            DocumentWriteError: If pikepdf fails to write the document
        """
        buffer = io.BytesIO()
        try:
            doc.save(buffer)
        except (pikepdf.PdfError, ValueError) as e:
            raise DocumentWriteError(str(e)) from e
        return buffer.getvalue()

    def close(self, doc: pikepdf.Pdf | None) -> None:
        if doc is None:
            return
        try:
            doc.close()
        except pikepdf.PdfError as e:
            logger.warning("Failed to close PDF handle: %s", e)
